import uuid
from typing import Any, Optional

from pembukuan.models.transactions import TransactionFile
from pembukuan.utils.time_utils import local_now

DEFAULT_MIME_TYPE = "application/octet-stream"


def new_file_id() -> str:
    return f"file-{uuid.uuid4().hex}"


def build_file(file: Any, position: int, keep_identity: bool = False) -> TransactionFile:
    """
    Build a ``TransactionFile`` row from incoming metadata.

    A fresh identifier and upload time are assigned unless ``keep_identity`` is set
    and the incoming record already carries them (whole-list replacement on update).
    """
    file_id: Optional[str] = file.id if keep_identity else None
    uploaded_at = file.uploaded_at if keep_identity else None
    return TransactionFile(
        id=file_id or new_file_id(),
        position=position,
        filename=file.filename,
        original_name=file.original_name,
        size=file.size or 0,
        mime_type=file.mime_type or DEFAULT_MIME_TYPE,
        uploaded_at=uploaded_at or local_now(),
    )
