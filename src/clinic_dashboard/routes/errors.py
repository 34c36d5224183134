"""Translation of view and dialog failures into HTTP errors."""

from typing import NoReturn

from fastapi import HTTPException

from clinic_dashboard.dialogs.base import FormDialog
from clinic_dashboard.exceptions import FormValidationError
from clinic_dashboard.views.base import CollectionView


async def mount(view: CollectionView) -> None:
    """Loads a view, failing the request if its collections are unavailable."""
    if not await view.reload():
        raise HTTPException(status_code=502, detail=view.error)


async def submit(dialog: FormDialog) -> None:
    """Submits a dialog; validation failures are 422, API failures 502."""
    if await dialog.submit():
        return
    if isinstance(dialog.last_error, FormValidationError):
        raise HTTPException(status_code=422, detail=dialog.error)
    raise HTTPException(status_code=502, detail=dialog.error)


def raise_not_found(what: str) -> NoReturn:
    raise HTTPException(status_code=404, detail=f"{what} no encontrado")


def raise_unconfirmed() -> NoReturn:
    raise HTTPException(status_code=409, detail="Eliminación no confirmada")


def raise_delete_failed(view: CollectionView) -> NoReturn:
    raise HTTPException(status_code=502, detail=view.error)
