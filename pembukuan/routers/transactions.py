from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pembukuan.crud import transactions as crud
from pembukuan.crud.transactions import OMZET, PENGELUARAN, TransactionFilters, TransactionScope
from pembukuan.database import get_db
from pembukuan.errors import NotFoundError
from pembukuan.schemas.transactions import FilesAttach, TransactionCreate, TransactionUpdate
from pembukuan.utils.auth_utils import get_current_user
from pembukuan.utils.responses import success_response


def build_router(path: str, scope: TransactionScope, tag: str) -> APIRouter:
    """Routes for one transaction surface (``/omzet`` or ``/pengeluaran``)."""
    router = APIRouter(prefix=path, tags=[tag], dependencies=[Depends(get_current_user)])
    label = scope.label

    def load(db: Session, transaction_id: str):
        transaction = crud.get_transaction(db, scope, transaction_id)
        if transaction is None:
            raise NotFoundError(f"{label} not found")
        return transaction

    @router.get("")
    def read_transactions(
        search: Optional[str] = None,
        transaction_type: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        account_id: Optional[str] = None,
        branch_id: Optional[str] = None,
        db: Session = Depends(get_db),
    ):
        filters = TransactionFilters(
            search=search,
            transaction_type=transaction_type,
            account_id=account_id,
            branch_id=branch_id,
            start_date=start_date,
            end_date=end_date,
        )
        data = [crud.serialize_transaction(t) for t in crud.list_transactions(db, scope, filters)]
        return success_response(data, message=f"Successfully retrieved {label} data.", total=len(data))

    @router.get("/{transaction_id}")
    def read_transaction(transaction_id: str, db: Session = Depends(get_db)):
        transaction = load(db, transaction_id)
        return success_response(crud.serialize_transaction(transaction), message=f"Successfully retrieved {label} data.")

    @router.post("", status_code=status.HTTP_201_CREATED)
    def create_transaction(payload: TransactionCreate, db: Session = Depends(get_db)):
        transaction = crud.create_transaction(db, scope, payload)
        return success_response(
            crud.serialize_transaction(transaction),
            message=f"{label} {transaction.id} successfully created.",
            code=status.HTTP_201_CREATED,
        )

    @router.patch("/{transaction_id}")
    def update_transaction(transaction_id: str, payload: TransactionUpdate, db: Session = Depends(get_db)):
        transaction = crud.update_transaction(db, scope, load(db, transaction_id), payload)
        return success_response(crud.serialize_transaction(transaction), message=f"{label} {transaction_id} successfully updated.")

    @router.delete("/{transaction_id}")
    def delete_transaction(transaction_id: str, db: Session = Depends(get_db)):
        crud.deactivate_transaction(db, scope, load(db, transaction_id))
        return success_response(message=f"{label} {transaction_id} successfully deactivated.")

    @router.post("/{transaction_id}/files")
    def add_files(transaction_id: str, payload: FilesAttach, db: Session = Depends(get_db)):
        transaction = crud.add_files(db, scope, load(db, transaction_id), payload.files)
        return success_response(
            {"transaction_id": transaction.id, "files": crud.serialize_files(transaction)},
            message=f"Files added successfully to {label.lower()}",
        )

    @router.delete("/{transaction_id}/files/{file_id}")
    def remove_file(transaction_id: str, file_id: str, db: Session = Depends(get_db)):
        if not crud.remove_file(db, scope, load(db, transaction_id), file_id):
            raise NotFoundError("File not found")
        return success_response(message=f"File removed successfully from {label.lower()}")

    return router


omzet_router = build_router("/omzet", OMZET, "Omzet")
pengeluaran_router = build_router("/pengeluaran", PENGELUARAN, "Pengeluaran")
