"""Budgeting advice from Gemini using the google-genai SDK."""
from typing import Callable, Optional, Sequence

from google import genai
from google.genai import errors, types

from .prompt import SYSTEM_INSTRUCTION, build_prompt
from plutus.ledger.models import Transaction
from plutus.utils.logger import get_logger
from plutus.utils.exceptions import MissingCredentialError, TransportError, ValidationError

logger = get_logger()

DEFAULT_MODEL = "gemini-2.5-flash"


class AdvisoryClient:
    """
    Sends a financial summary plus question to Gemini and returns the answer.

    One blocking round trip per request: no retries, no streaming.
    """

    def __init__(
        self,
        model_name: str = DEFAULT_MODEL,
        client_factory: Callable[..., genai.Client] = genai.Client,
    ):
        self.model_name = model_name
        self.client_factory = client_factory

    def advise(self, transactions: Sequence[Transaction], question: str, api_key: Optional[str]) -> str:
        """Build the prompt for ``question`` and request advice for it."""
        if not question or not question.strip():
            raise ValidationError("Please enter a question")
        self._require_credential(api_key)
        return self.request_advice(build_prompt(transactions, question.strip()), api_key)

    def request_advice(self, prompt: str, api_key: Optional[str]) -> str:
        """
        Send ``prompt`` with the advisor system instruction.

        Returns:
            Text of the first candidate

        Raises:
            MissingCredentialError: no API key, checked before any request
            TransportError: failed request, non-success status or unexpected
                response shape
        """
        self._require_credential(api_key)

        logger.info(f"Requesting advice from {self.model_name}")
        try:
            client = self.client_factory(api_key=api_key)
            response = client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(system_instruction=SYSTEM_INSTRUCTION),
            )
        except errors.APIError as e:
            logger.error(f"Advice request failed with status {e.code}: {e.message}")
            raise TransportError(
                f"Failed to fetch advice. ({e.code})", status_code=e.code
            ) from e
        except Exception as e:
            logger.error(f"Advice request failed: {e}")
            raise TransportError(f"Failed to fetch advice: {e}") from e

        try:
            text = response.candidates[0].content.parts[0].text
        except (AttributeError, IndexError, TypeError) as e:
            logger.error(f"Unexpected advice response shape: {e}")
            raise TransportError("Failed to parse advice response") from e
        if not isinstance(text, str):
            raise TransportError("Failed to parse advice response")

        logger.info(f"Received advice ({len(text)} chars)")
        return text

    @staticmethod
    def _require_credential(api_key: Optional[str]) -> None:
        if not api_key or not api_key.strip():
            raise MissingCredentialError("API Key is missing. Set one with 'plutus set-key'.")
