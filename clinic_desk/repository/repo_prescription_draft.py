import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from clinic_desk.core.config import settings
from clinic_desk.helpers.prescribing import PrescriptionLine

logger = logging.getLogger(__name__)


@dataclass
class PrescriptionDraft:
    draft_id: str
    doctor_id: str
    created_at: datetime
    updated_at: datetime
    lines: List[PrescriptionLine] = field(default_factory=list)


# Drafts live only as long as the process; sync endpoints run on a thread pool
_drafts: Dict[str, PrescriptionDraft] = {}
draft_lock = threading.RLock()


class PrescriptionDraftRepository:
    def __init__(self, ttl_seconds: Optional[int] = None):
        self.ttl = timedelta(seconds=ttl_seconds if ttl_seconds is not None else settings.PRESCRIPTION_DRAFT_TTL_SECONDS)

    def create(self, doctor_id: str) -> PrescriptionDraft:
        now = datetime.now()
        draft = PrescriptionDraft(draft_id=uuid.uuid4().hex, doctor_id=doctor_id, created_at=now, updated_at=now)
        with draft_lock:
            self.expire_stale(now)
            _drafts[draft.draft_id] = draft
        return draft

    def get(self, draft_id: str, doctor_id: str) -> Optional[PrescriptionDraft]:
        with draft_lock:
            self.expire_stale()
            draft = _drafts.get(draft_id)
            if draft is None or draft.doctor_id != doctor_id:
                return None
            return draft

    def get_all_for_doctor(self, doctor_id: str) -> List[PrescriptionDraft]:
        with draft_lock:
            self.expire_stale()
            return [draft for draft in _drafts.values() if draft.doctor_id == doctor_id]

    def touch(self, draft: PrescriptionDraft) -> PrescriptionDraft:
        draft.updated_at = datetime.now()
        return draft

    def delete(self, draft_id: str) -> bool:
        with draft_lock:
            return _drafts.pop(draft_id, None) is not None

    def restore(self, draft: PrescriptionDraft) -> PrescriptionDraft:
        with draft_lock:
            _drafts[draft.draft_id] = self.touch(draft)
        return draft

    def expire_stale(self, now: Optional[datetime] = None) -> int:
        now = now or datetime.now()
        with draft_lock:
            stale = [key for key, draft in _drafts.items() if now - draft.updated_at > self.ttl]
            for key in stale:
                del _drafts[key]
        if stale:
            logger.info(f"Expired {len(stale)} idle prescription draft(s)")
        return len(stale)

    @staticmethod
    def clear():
        with draft_lock:
            _drafts.clear()


def get_draft_repository() -> PrescriptionDraftRepository:
    return PrescriptionDraftRepository()
