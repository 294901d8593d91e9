from dataclasses import dataclass

from ..exceptions import ValidationError

MAX_BODY_LENGTH = 1000


@dataclass(frozen=True)
class MessageBody:
    """Immutable value object for SMS message text."""
    text: str

    def __post_init__(self) -> None:
        if not self.text or len(self.text.strip()) == 0:
            raise ValidationError("Message body cannot be empty")
        if len(self.text) > MAX_BODY_LENGTH:
            raise ValidationError(f"Message body cannot exceed {MAX_BODY_LENGTH} characters")

    def __str__(self) -> str:
        return self.text
