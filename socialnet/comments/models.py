# socialnet/comments/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    Integer,
    Text,
    DateTime,
    func,
    ForeignKey,
    UniqueConstraint,
)
from socialnet.db.base import Base


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class CommentLike(Base):
    """
    Quién dio like a qué comentario.
    Un usuario solo puede dar like una vez a un comentario.
    """

    __tablename__ = "comment_likes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    created_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "comment_id",
            name="uq_comment_like_user_comment",
        ),
    )
