"""Messages shown on the login screen."""

from dataclasses import dataclass
from typing import Iterator

DEFAULT_NOTICE_CODE = "secureaccess"
DEFAULT_NOTICE = "Please log in to view this site."


@dataclass
class LoginNotice:
    code: str
    message: str
    severity: str = "error"  # error | message


class LoginErrors:
    """Ordered collection of error codes and messages for the login screen.

    Entries with severity "message" are informational and rendered apart
    from real errors. The collection may be empty but is never None.
    """

    def __init__(self, notices: list[LoginNotice] | None = None):
        self._notices: list[LoginNotice] = list(notices or [])

    def add(self, code: str, message: str, severity: str = "error") -> None:
        self._notices.append(LoginNotice(code=code, message=message, severity=severity))

    def get_error_code(self) -> str:
        """Return the first queued code, or an empty string."""
        return self._notices[0].code if self._notices else ""

    def errors(self) -> list[LoginNotice]:
        return [n for n in self._notices if n.severity != "message"]

    def messages(self) -> list[LoginNotice]:
        return [n for n in self._notices if n.severity == "message"]

    def __iter__(self) -> Iterator[LoginNotice]:
        return iter(self._notices)

    def __len__(self) -> int:
        return len(self._notices)

    def __bool__(self) -> bool:
        return bool(self._notices)


class LoginRenderPass:
    """State for rendering the login screen once.

    filter_message() must run before filter_errors(): a message from any
    other source takes priority over the default notice.
    """

    def __init__(self):
        self.default_notice_enabled = True

    def filter_message(self, message: str) -> str:
        if message:
            self.default_notice_enabled = False
        return message

    def filter_errors(self, errors: LoginErrors, error: str = "") -> LoginErrors:
        if self.default_notice_enabled and not error and not errors.get_error_code():
            errors.add(DEFAULT_NOTICE_CODE, DEFAULT_NOTICE, "message")
        return errors


def prepare_login_screen(
    message: str,
    errors: LoginErrors,
    error: str = "",
) -> tuple[str, LoginErrors]:
    """Run the message filter then the errors filter for a single render.

    Args:
        message: Candidate message to display above the login form.
        errors: Errors and messages already queued for this request.
        error: Single error string some callers use instead of `errors`.

    Returns:
        The message (unchanged) and the possibly extended errors.
    """
    render = LoginRenderPass()
    message = render.filter_message(message)
    errors = render.filter_errors(errors, error)
    return message, errors
