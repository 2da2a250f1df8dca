from common_sense.core.errors import ValidationError

MATCH_MESSAGE_MAX_LENGTH = 1000
DIRECT_MESSAGE_MAX_LENGTH = 2000


def clean_content(content: str, max_length: int) -> str:
    """Trim a message body and enforce its length bounds."""
    text = (content or "").strip()
    if not text:
        raise ValidationError("Write a message before sending.")
    if len(text) > max_length:
        raise ValidationError(f"Messages must be {max_length:,} characters or fewer.")
    return text
