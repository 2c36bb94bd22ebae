import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.concurrency import run_in_threadpool

from .auth import PasswordHasher
from .config import Settings
from .dispatcher import Dispatcher, Generator
from .errors import FaultError, RelayError
from .llm_groq import make_groq_generator
from .sessions import TokenService
from .store import JsonCredentialStore


def configure_logging(level: str):
    logger.remove()
    logger.add(sys.stderr, level=level)


def create_app(settings: Settings | None = None, generate: Generator | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    store = JsonCredentialStore(settings.users_path)
    if generate is None:
        generate = make_groq_generator(settings.groq_api_key, settings.groq_model, settings.groq_timeout)
    dispatcher = Dispatcher(
        store=store,
        hasher=PasswordHasher(rounds=settings.hash_rounds),
        tokens=TokenService(settings.jwt_secret),
        generate=generate,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.init()
        if settings.uses_default_secret:
            logger.warning("JWT_SECRET not set, signing tokens with the insecure default secret")
        if not settings.groq_api_key:
            logger.warning("GROQ_API_KEY not set, chat requests will fail")
        logger.info(f"Relay ready (model={settings.groq_model})")
        yield
        logger.info("Relay shutting down")

    app = FastAPI(title="authrelay", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.dispatcher = dispatcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/")
    async def relay(request: Request):
        raw = await request.body()
        try:
            result = await run_in_threadpool(dispatcher.handle_body, raw)
        except FaultError as e:
            logger.error(f"Server fault: {type(e).__name__}: {e.detail}")
            return JSONResponse({"success": False, "message": e.message}, status_code=e.status_code)
        except Exception:
            logger.exception("Unhandled error in relay")
            return JSONResponse({"success": False, "message": RelayError.default_message}, status_code=500)
        return result.to_body()

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
