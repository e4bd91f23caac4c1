# socialnet/follows/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, DateTime, func, ForeignKey, UniqueConstraint
from socialnet.db.base import Base


class Follow(Base):
    """
    Arista dirigida follower → user (user_id es a quien se sigue).
    """

    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("user_id", "follower_id", name="uq_follow_pair"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    follower_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    created_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
