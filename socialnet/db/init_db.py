import logging
from socialnet.db.session import engine
from socialnet.db.base import Base

# 👇 importa todos los modelos que deben existir en la DB
from socialnet.users.models import User  # noqa: F401
from socialnet.posts.models import Post, PostLike  # noqa: F401
from socialnet.comments.models import Comment, CommentLike  # noqa: F401
from socialnet.follows.models import Follow  # noqa: F401

log = logging.getLogger("uvicorn")


async def init_models():
    """
    Crea/verifica todas las tablas declaradas en Base.metadata.
    Si la DB no responde, el arranque falla.
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        log.error(f"❌ DB init falló: {e!r}")
        raise
    log.info("✅ DB init: tablas creadas/verificadas.")
