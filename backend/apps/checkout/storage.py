from __future__ import annotations

import os
import uuid

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile

from apps.common import get_logger

logger = get_logger(__name__).bind(component="checkout", layer="storage")

PROOF_DIRECTORY = "payment-proofs"


def store_proof(user_id: int, upload: UploadedFile) -> str:
    """Save a transfer receipt and return the storage name used as its reference."""
    _, extension = os.path.splitext(upload.name or "")
    name = f"{PROOF_DIRECTORY}/{user_id}/{uuid.uuid4().hex}{extension.lower()}"
    saved = default_storage.save(name, upload)
    logger.info("Payment proof stored", user_id=user_id, name=saved, size=upload.size)
    return saved


def discard_proof(name: str) -> None:
    """Delete a stored receipt that could not be attached to an attempt."""
    default_storage.delete(name)
    logger.info("Payment proof discarded", name=name)
