"""Free-text transaction extraction through the language model."""

import json
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional

import litellm
from pydantic import BaseModel, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from txntracker.ai.client import AIClient, get_ai_client, strip_code_fence
from txntracker.ai.prompts import EXTRACTION_SYSTEM, EXTRACTION_USER
from txntracker.config import settings
from txntracker.exceptions import UpstreamError
from txntracker.models.category import Category, parse_category
from txntracker.models.transaction import amount_fits

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (
    litellm.exceptions.Timeout,
    litellm.exceptions.APIConnectionError,
    litellm.exceptions.RateLimitError,
    TimeoutError,
)


class ExtractedTransaction(BaseModel):
    """One transaction candidate as returned by the model."""
    date: date
    description: str = Field(..., min_length=1)
    amount: Decimal
    category: Category = Category.UNKNOWN
    confidence: int = Field(0, ge=0, le=100)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> Any:
        # The model is told to use today's date when none is given
        if isinstance(value, str):
            try:
                return datetime.strptime(value.strip(), "%Y-%m-%d").date()
            except ValueError:
                return date.today()
        return value or date.today()

    @field_validator("category", mode="before")
    @classmethod
    def known_category(cls, value: Any) -> Category:
        return parse_category(value if isinstance(value, str) else None)

    @field_validator("amount")
    @classmethod
    def storable_amount(cls, value: Decimal) -> Decimal:
        if not amount_fits(value):
            raise ValueError("amount out of range")
        return value

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, value: Any) -> int:
        try:
            return max(0, min(100, int(round(float(value)))))
        except (TypeError, ValueError):
            return 0

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


_extracted_list = TypeAdapter(List[ExtractedTransaction])


def parse_extraction_output(content: Optional[str]) -> List[ExtractedTransaction]:
    """Validate raw model output: a JSON array or a {"transactions": [...]} object."""
    try:
        payload = json.loads(strip_code_fence(content))
    except json.JSONDecodeError as e:
        raise UpstreamError("Failed to parse transactions from model response", content=content) from e

    if isinstance(payload, dict):
        payload = payload.get("transactions", [payload] if "description" in payload else [])
    if not isinstance(payload, list):
        raise UpstreamError("Model response is not a list of transactions", content=content)

    try:
        return _extracted_list.validate_python(payload)
    except PydanticValidationError as e:
        raise UpstreamError("Model response does not match the transaction schema", content=content) from e


class ExtractionService:
    """Turns forwarded SMS text into structured transaction candidates."""

    def __init__(self, client: Optional[AIClient] = None):
        self._client = client

    @property
    def client(self) -> AIClient:
        if self._client is None:
            self._client = get_ai_client()
        return self._client

    async def extract(self, text: str) -> List[ExtractedTransaction]:
        system_prompt = EXTRACTION_SYSTEM.format(
            today=date.today().isoformat(),
            categories=", ".join(f'"{c.value}"' for c in Category),
        )
        user_prompt = EXTRACTION_USER.format(text=text)

        try:
            content = await self.client.complete(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                temperature=settings.ai_temperature,
                max_tokens=settings.ai_max_tokens,
                json_mode=True,
            )
        except RETRYABLE_ERRORS as e:
            raise UpstreamError("Transaction extraction timed out or could not connect", retryable=True, cause=e) from e
        except Exception as e:
            raise UpstreamError("Failed to parse transactions", cause=e) from e

        transactions = parse_extraction_output(content)
        logger.info("Model extracted %d transaction(s)", len(transactions))
        return transactions


_extraction_service: Optional[ExtractionService] = None

def get_extraction_service() -> ExtractionService:
    global _extraction_service
    if _extraction_service is None:
        _extraction_service = ExtractionService()
    return _extraction_service
