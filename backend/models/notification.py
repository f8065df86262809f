"""Pydantic models for the match-and-notify pipeline."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from models.types import EmailAddress, ItemID, UserID


class NotificationRequest(BaseModel):
    """Trigger payload sent when a found item is posted.

    Accepts the camelCase names used by the web client as well as the
    snake_case field names. Values are kept as sent: the category is
    matched byte-for-byte, so surrounding whitespace is significant.
    """

    model_config = ConfigDict(populate_by_name=True)

    category: str | None = None
    found_item_id: ItemID | None = Field(None, alias="foundItemId")
    found_by_user_id: UserID | None = Field(None, alias="foundByUserId")
    found_item_title: str | None = Field(None, alias="foundItemTitle")


class NotificationMessage(BaseModel):
    """Email built once per request and handed to the dispatcher."""

    from_email: str
    to: list[EmailAddress] = Field(..., min_length=1)
    subject: str
    html: str
    text: str

    def to_resend_params(self) -> dict[str, Any]:
        return {
            "from": self.from_email,
            "to": self.to,
            "subject": self.subject,
            "html": self.html,
            "text": self.text,
        }


class NotificationResult(BaseModel):
    """Outcome of one pipeline invocation."""

    message: str
    recipients: int = Field(0, ge=0)
    resend: dict[str, Any] | None = None

    def to_response(self) -> dict[str, Any]:
        """JSON body for the HTTP response (short-circuits carry only the message)."""
        if self.resend is None and self.recipients == 0:
            return {"message": self.message}
        return {
            "message": self.message,
            "recipients": self.recipients,
            "resend": self.resend,
        }
