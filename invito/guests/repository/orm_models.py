from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from invito.config.table_names import TableNames
from invito.guests.dtos import GuestStatus
from invito.models.base import Base, TimeStamp


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value
    __table_args__ = (
        # Backs the confirmed-count query of the admission check
        Index("ix_guests_event_id_status", "event_id", "status"),
    )

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Sole credential for RSVP actions, never re-issued
    invite_code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)

    status: Mapped[str] = mapped_column(
        Enum(GuestStatus, name="guest_status_enum"),
        default=GuestStatus.PENDING,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Guest {self.name} - {self.status}>"
