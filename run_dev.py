# run_dev.py
import os
import socket

APP_MODULE = os.getenv("APP_MODULE", "socialnet.main:app")


def _lan_ip() -> str:
    """Obtiene IP LAN real sin depender de hostname/DNS."""
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        return s.getsockname()[0]
    except OSError:
        return "127.0.0.1"
    finally:
        s.close()


def main():
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload_flag = os.getenv("RELOAD", "1").strip() in ("1", "true", "True", "yes", "on")

    print(f"🔗 API local: http://127.0.0.1:{port}")
    print(f"📱 API LAN:   http://{_lan_ip()}:{port}")
    print(f"🌀 reload={'ON' if reload_flag else 'OFF'}")

    uvicorn.run(
        APP_MODULE,
        host=host,
        port=port,
        reload=reload_flag,
        reload_dirs=["socialnet"],
        timeout_keep_alive=30,
        timeout_graceful_shutdown=15,
        log_level=os.getenv("LOG_LEVEL", "info"),
        lifespan="on",
    )


if __name__ == "__main__":
    main()
