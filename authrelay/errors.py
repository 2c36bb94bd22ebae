class RelayError(Exception):
    """Base exception for all relay errors."""
    default_message = "Lỗi server."

    def __init__(self, message: str | None = None, status_code: int = 200):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class DomainError(RelayError):
    """Expected failure, reported to the client as success: false."""


class ValidationError(DomainError):
    """Missing or malformed request fields."""
    default_message = "Thiếu thông tin."


class ConflictError(DomainError):
    """Email already registered."""
    default_message = "Email đã tồn tại."


class NotFoundError(DomainError):
    """No account for the given email."""
    default_message = "Không tìm thấy tài khoản."


class AuthError(DomainError):
    """Wrong password."""
    default_message = "Sai mật khẩu."


class TokenError(DomainError):
    """Invalid or expired session token. Carries no message to the client."""
    default_message = ""


class FaultError(RelayError):
    """Server-side fault; detail stays in the logs."""

    def __init__(self, detail: str = ""):
        super().__init__(RelayError.default_message, status_code=500)
        self.detail = detail


class StorageError(FaultError):
    """Credential store unreadable or unwritable."""


class ServerError(FaultError):
    """Unexpected fault, including upstream generation failures."""
