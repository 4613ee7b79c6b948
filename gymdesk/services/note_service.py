"""Member notes service."""

from typing import List

from sqlalchemy.orm import Session

from gymdesk.core.exceptions import ResourceNotFoundError
from gymdesk.models.member_note import MemberNote
from gymdesk.schemas.schemas import NoteCreate, NoteUpdate
from gymdesk.services.auth_service import auth_service


class NoteService:

    @staticmethod
    def list_notes(db: Session, gym_id: int, member_id: int) -> List[MemberNote]:
        return (
            db.query(MemberNote)
            .filter(MemberNote.gym_id == gym_id, MemberNote.member_id == member_id)
            .order_by(MemberNote.is_pinned.desc(), MemberNote.created_at.desc(), MemberNote.id.desc())
            .all()
        )

    @staticmethod
    def get(db: Session, gym_id: int, note_id: int) -> MemberNote:
        note = db.query(MemberNote).filter(
            MemberNote.id == note_id, MemberNote.gym_id == gym_id
        ).first()
        if not note:
            raise ResourceNotFoundError(f"Note {note_id} not found")
        return note

    @staticmethod
    def create(db: Session, gym_id: int, author_id: int, data: NoteCreate) -> MemberNote:
        """Attach a note to a member of the same gym."""
        auth_service.get_gym_user(db, data.member_id, gym_id)
        note = MemberNote(gym_id=gym_id, author_id=author_id, **data.model_dump())
        db.add(note)
        db.commit()
        db.refresh(note)
        return note

    @staticmethod
    def update(db: Session, gym_id: int, note_id: int, data: NoteUpdate) -> MemberNote:
        note = NoteService.get(db, gym_id, note_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(note, field, value)
        db.commit()
        db.refresh(note)
        return note

    @staticmethod
    def delete(db: Session, gym_id: int, note_id: int) -> None:
        note = NoteService.get(db, gym_id, note_id)
        db.delete(note)
        db.commit()


note_service = NoteService()
