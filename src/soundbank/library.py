"""Persist synthesis models as JSON documents inside the bank."""
from __future__ import annotations

import json
import time
import uuid
from typing import Iterable, List, Optional

from pydantic import ValidationError

from .errors import BankIOError
from .logging import get_logger
from .models import Envelope, HarmonicModel, ModelMeta, ModelSource, NoiseModel, SmsModel, validate_model_id
from .store import BankStore

SMS_MODELS_DIR = "models/sms"
_SUFFIX = ".json"

logger = get_logger("library")


def now_ms() -> int:
    return int(time.time() * 1000)


def generate_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class ModelLibrary:
    """Save, delete and reload :class:`SmsModel` files under ``models/sms``."""

    def __init__(self, store: BankStore, directory: str = SMS_MODELS_DIR) -> None:
        self._store = store
        self._directory = directory.rstrip("/")

    def path_for(self, model_id: str) -> str:
        return f"{self._directory}/{validate_model_id(model_id)}{_SUFFIX}"

    def create(
        self,
        name: str,
        harmonic: HarmonicModel,
        noise: NoiseModel,
        envelope: Envelope,
        *,
        tags: Optional[Iterable[str]] = None,
        source_filename: Optional[str] = None,
        model_id: Optional[str] = None,
    ) -> SmsModel:
        """Build a model with fresh metadata; nothing is written."""
        stamp = now_ms()
        meta = ModelMeta(
            id=model_id or generate_id("sms"),
            created_at=stamp,
            updated_at=stamp,
            tags=list(tags or []),
            source=ModelSource(filename=source_filename) if source_filename else None,
        )
        return SmsModel(name=name, harmonic=harmonic, noise=noise, envelope=envelope, meta=meta)

    def touch(self, model: SmsModel) -> SmsModel:
        meta = model.meta.model_copy(update={"updated_at": max(now_ms(), model.meta.updated_at)})
        return model.model_copy(update={"meta": meta})

    def save(self, model: SmsModel) -> str:
        rel_path = self.path_for(model.meta.id)
        self._store.write_text(rel_path, model.to_json())
        logger.info("library.saved", model_id=model.meta.id, rel_path=rel_path)
        return rel_path

    def delete(self, model_id: str) -> None:
        self._store.remove(self.path_for(model_id))
        logger.info("library.deleted", model_id=model_id)

    def load_all(self) -> List[SmsModel]:
        """Load every readable model, skipping foreign or malformed files."""
        models: List[SmsModel] = []
        for name in self._store.read_dir(self._directory):
            if not name.endswith(_SUFFIX):
                continue
            rel_path = f"{self._directory}/{name}"
            try:
                raw = self._store.read_text(rel_path)
            except BankIOError as exc:
                logger.warning("library.skipped", rel_path=rel_path, reason=str(exc))
                continue
            model = _parse_model(raw)
            if model is None:
                logger.warning("library.skipped", rel_path=rel_path, reason="not an sms model")
                continue
            models.append(model)
        return models


def _parse_model(raw: str) -> Optional[SmsModel]:
    try:
        document = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(document, dict) or document.get("method") != "sms":
        return None
    meta = document.get("meta")
    if not isinstance(meta, dict) or not meta.get("id"):
        return None
    try:
        return SmsModel.model_validate(document)
    except ValidationError:
        return None


__all__ = ["ModelLibrary", "SMS_MODELS_DIR", "generate_id", "now_ms"]
