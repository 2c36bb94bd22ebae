import json
from typing import Callable

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from .auth import PasswordHasher
from .errors import (
    AuthError,
    ConflictError,
    DomainError,
    FaultError,
    NotFoundError,
    ServerError,
    TokenError,
    ValidationError,
)
from .models import ActionReq, ActionResp, UserRecord
from .sessions import TokenService
from .store import JsonCredentialStore
from .utils import timed

Generator = Callable[[str, str], str]

INVALID_ACTION = "Action không hợp lệ."
INVALID_REQUEST = "Yêu cầu không hợp lệ."
MISSING_MESSAGE = "Thiếu nội dung tin nhắn."

CHAT_SYSTEM_PROMPT = """
You are a friendly, helpful assistant.
- Answer in the same language the user writes in.
- Keep answers clear and concise; use short lists or steps when useful.
- If the question is ambiguous, ask one clarifying question at the end.
""".strip()


def _filled(*values) -> bool:
    return all(isinstance(v, str) and v != "" for v in values)


def parse_body(raw: bytes | str) -> ActionReq:
    """Parse a raw request body; clients may send JSON as text/plain."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise ValidationError(INVALID_REQUEST)
    try:
        data = json.loads(raw or "{}")
    except ValueError:
        raise ValidationError(INVALID_REQUEST)
    if not isinstance(data, dict):
        raise ValidationError(INVALID_REQUEST)
    try:
        return ActionReq.model_validate(data)
    except PydanticValidationError:
        raise ValidationError(INVALID_REQUEST)


class Dispatcher:
    def __init__(
        self,
        store: JsonCredentialStore,
        hasher: PasswordHasher,
        tokens: TokenService,
        generate: Generator,
    ):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self.generate = generate
        self._routes = {
            "signup": self.signup,
            "login": self.login,
            "verify": self.verify,
            "logout": self.logout,
            "chat": self.chat,
        }

    def handle_body(self, raw: bytes | str) -> ActionResp:
        try:
            req = parse_body(raw)
        except DomainError as e:
            logger.warning(f"Rejected request body: {e.message}")
            return ActionResp(success=False, message=e.message)
        return self.handle(req)

    def handle(self, req: ActionReq) -> ActionResp:
        """Route `req` by action. Raises FaultError on storage/upstream faults."""
        try:
            route = self._routes.get(req.action or "")
            if route is None:
                raise ValidationError(INVALID_ACTION)
            return route(req)
        except DomainError as e:
            logger.debug(f"{req.action}: {type(e).__name__} {e.message}")
            return ActionResp(success=False, message=e.message or None)

    def signup(self, req: ActionReq) -> ActionResp:
        if not _filled(req.email, req.password, req.name):
            raise ValidationError()
        if self.store.find_by_email(req.email):
            raise ConflictError()

        with timed("hash_password"):
            pw_hash = self.hasher.hash(req.password)
        self.store.append(UserRecord(name=req.name, email=req.email, password_hash=pw_hash))
        logger.info(f"New account: {req.email}")
        return ActionResp(success=True)

    def login(self, req: ActionReq) -> ActionResp:
        if not _filled(req.email, req.password):
            raise ValidationError()
        user = self.store.find_by_email(req.email)
        if user is None:
            raise NotFoundError()
        if not self.hasher.verify(req.password, user.password_hash):
            raise AuthError()

        token = self.tokens.issue(user.email)
        logger.info(f"Login: {user.email}")
        return ActionResp(success=True, token=token, name=user.name, email=user.email)

    def verify(self, req: ActionReq) -> ActionResp:
        claim = self.tokens.verify(req.token)
        if claim is None:
            raise TokenError()
        user = self.store.find_by_email(claim.email)
        if user is None:
            raise TokenError()
        return ActionResp(success=True, name=user.name, email=user.email)

    def logout(self, req: ActionReq) -> ActionResp:
        # tokens are stateless; the client discards its copy
        return ActionResp(success=True)

    def chat(self, req: ActionReq) -> ActionResp:
        if not _filled(req.message) or not req.message.strip():
            raise ValidationError(MISSING_MESSAGE)
        try:
            with timed("generate_answer"):
                answer = self.generate(CHAT_SYSTEM_PROMPT, req.message)
        except FaultError:
            raise
        except Exception as e:
            raise ServerError(f"generation failed: {e}") from e
        return ActionResp(success=True, answer=answer)
