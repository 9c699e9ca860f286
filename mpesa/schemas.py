"""
Request-scoped value types passed between the relay's layers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .constants import OUTCOME_STATUS_CODES, PaymentOutcome, TokenFailure
from .exceptions import ValidationError


@dataclass
class PaymentRequest:
    """An STK push request as received from the client application."""

    phone: Any = None
    amount: Any = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PaymentRequest':
        data = data if isinstance(data, dict) else {}
        return cls(
            phone=data.get('phone'),
            amount=data.get('amount'),
            name=data.get('name'),
        )

    def validate(self):
        """
        Check that phone and amount are present.
        The amount is otherwise forwarded to Daraja as given.

        Raises:
            ValidationError: If phone or amount is missing
        """
        if not self.phone or not self.amount:
            raise ValidationError("Missing phone or amount in request body.")


@dataclass(frozen=True)
class TokenResult:
    """
    Outcome of an access token request.

    Exactly one of ``token`` and ``failure`` is set.
    """

    token: Optional[str] = None
    failure: Optional[TokenFailure] = None

    @property
    def ok(self) -> bool:
        return self.token is not None

    @classmethod
    def success(cls, token: str) -> 'TokenResult':
        return cls(token=token)

    @classmethod
    def failed(cls, failure: TokenFailure) -> 'TokenResult':
        return cls(failure=failure)


@dataclass
class PaymentResult:
    """Terminal result of the STK push workflow."""

    outcome: PaymentOutcome
    message: str
    details: Any = None
    response: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.outcome == PaymentOutcome.SUCCESS

    @property
    def status_code(self) -> int:
        return OUTCOME_STATUS_CODES[self.outcome]

    def to_dict(self) -> Dict[str, Any]:
        body = {'success': self.success, 'message': self.message}
        if self.details is not None:
            body['details'] = self.details
        return body
