# socialnet/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from socialnet.core.config import settings
from socialnet.db.init_db import init_models
from socialnet.db.session import engine

# routers
from socialnet.users.router import router as users_router
from socialnet.follows.router import router as follows_router
from socialnet.posts.router import router as posts_router, user_posts_router
from socialnet.comments.router import router as comments_router, post_comments_router

log = logging.getLogger("uvicorn")

app = FastAPI(title="socialnet API")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    log.info("🚀 Iniciando servicio…")
    await init_models()
    log.info("✅ Startup listo.")


@app.on_event("shutdown")
async def on_shutdown():
    await engine.dispose()
    log.info("👋 Conexiones cerradas.")


@app.get("/api/health/")
async def health():
    return {"ok": True, "service": "socialnet"}


# routers
app.include_router(users_router)          # /api/users/...
app.include_router(follows_router)        # /api/users/{username}/follow...
app.include_router(user_posts_router)     # /api/users/{username}/posts/
app.include_router(posts_router)          # /api/posts/...
app.include_router(post_comments_router)  # /api/posts/{post_id}/comments/
app.include_router(comments_router)       # /api/comments/...
