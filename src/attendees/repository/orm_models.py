from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy_utils import UUIDType

from src.attendees.dtos import AttendeeStatus
from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp


class Attendee(Base, TimeStamp):
    __tablename__ = TableNames.ATTENDEES.value

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # Uniqueness is enforced by the duplicate check at intake
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    plus_one: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    status: Mapped[AttendeeStatus] = mapped_column(
        Enum(
            AttendeeStatus,
            name="attendee_status_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=AttendeeStatus.PENDING,
        nullable=False,
        index=True,
    )

    # Public URL of the QR image, set by invite dispatch
    qr_code_data: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Set when accepted, cleared once the QR invite went out
    invite_pending: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    invite_sent_on: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    def __repr__(self) -> str:
        return f"<Attendee {self.name} - {self.status}>"


class RSVPLog(Base, TimeStamp):
    """Append-only audit trail of RSVP submissions."""

    __tablename__ = TableNames.RSVP_LOGS.value

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    ip_address: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<RSVPLog {self.email} from {self.ip_address}>"


class EmailLog(Base, TimeStamp):
    __tablename__ = TableNames.EMAIL_LOGS.value

    resend_email_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True, unique=True
    )

    to_address: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    from_address: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(500), nullable=False)

    # Stored for debugging/audit
    html_body: Mapped[str | None] = mapped_column(Text, nullable=True)
    text_body: Mapped[str | None] = mapped_column(Text, nullable=True)

    email_type: Mapped[str] = mapped_column(
        Enum("qr_invitation", name="email_type_enum"),
        nullable=False,
        index=True,
    )

    attendee_id: Mapped[UUID | None] = mapped_column(
        UUIDType(binary=False),
        ForeignKey(f"{TableNames.ATTENDEES.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    status: Mapped[str] = mapped_column(
        Enum("pending", "sent", "failed", name="email_status_enum"),
        default="pending",
        nullable=False,
        index=True,
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<EmailLog {self.resend_email_id} to={self.to_address} status={self.status}>"
