"""Tests for prompt building and the advisory client."""
import unittest
from types import SimpleNamespace
from unittest import mock

from google.genai import errors

from plutus.advisor.client import AdvisoryClient
from plutus.advisor.prompt import SYSTEM_INSTRUCTION, build_prompt
from plutus.utils.exceptions import MissingCredentialError, TransportError, ValidationError
from helpers import example_set, make_transaction


def fake_response(text):
    part = SimpleNamespace(text=text)
    candidate = SimpleNamespace(content=SimpleNamespace(parts=[part]))
    return SimpleNamespace(candidates=[candidate])


class TestBuildPrompt(unittest.TestCase):
    """Test prompt context."""

    def test_example_prompt(self):
        prompt = build_prompt(example_set(), "How can I save more?")

        self.assertIn("Total Income: $1000.00", prompt)
        self.assertIn("Total Expenses: $250.00", prompt)
        self.assertIn("Net Balance: $750.00", prompt)
        self.assertIn("Food/Groceries: $250.00", prompt)
        self.assertTrue(prompt.rstrip().endswith("User Question: How can I save more?"))

    def test_breakdown_joins_categories(self):
        transactions = [
            make_transaction(amount="12.5", category="Reload"),
            make_transaction(amount="3", category="Savings"),
        ]
        prompt = build_prompt(transactions, "Ok?")
        self.assertIn("Expense Breakdown: Reload: $12.50, Savings: $3.00", prompt)

    def test_negative_balance(self):
        prompt = build_prompt([make_transaction(amount=40)], "Help")
        self.assertIn("Net Balance: $-40.00", prompt)


class TestAdvisoryClient(unittest.TestCase):
    """Test AdvisoryClient with a mocked SDK client."""

    def setUp(self):
        self.sdk = mock.MagicMock()
        self.factory = mock.MagicMock(return_value=self.sdk)
        self.client = AdvisoryClient(model_name="test-model", client_factory=self.factory)

    def test_returns_first_candidate_text(self):
        self.sdk.models.generate_content.return_value = fake_response("Cook at home.")

        advice = self.client.request_advice("prompt text", "secret")

        self.assertEqual(advice, "Cook at home.")
        self.factory.assert_called_once_with(api_key="secret")
        kwargs = self.sdk.models.generate_content.call_args.kwargs
        self.assertEqual(kwargs["model"], "test-model")
        self.assertEqual(kwargs["contents"], "prompt text")
        self.assertEqual(kwargs["config"].system_instruction, SYSTEM_INSTRUCTION)

    def test_missing_credential_checked_before_request(self):
        for key in [None, "", "   "]:
            with self.assertRaises(MissingCredentialError):
                self.client.request_advice("prompt", key)
        self.factory.assert_not_called()

    def test_api_error_carries_status(self):
        self.sdk.models.generate_content.side_effect = errors.ClientError(
            429, {"error": {"code": 429, "message": "quota", "status": "RESOURCE_EXHAUSTED"}}
        )

        with self.assertRaises(TransportError) as ctx:
            self.client.request_advice("prompt", "secret")

        self.assertEqual(ctx.exception.status_code, 429)
        self.assertIn("429", str(ctx.exception))

    def test_network_failure(self):
        self.sdk.models.generate_content.side_effect = ConnectionError("offline")

        with self.assertRaises(TransportError) as ctx:
            self.client.request_advice("prompt", "secret")

        self.assertIsNone(ctx.exception.status_code)
        self.assertIn("offline", str(ctx.exception))

    def test_unexpected_shape(self):
        for response in [
            SimpleNamespace(candidates=[]),
            SimpleNamespace(candidates=None),
            fake_response(None),
        ]:
            self.sdk.models.generate_content.return_value = response
            with self.assertRaises(TransportError):
                self.client.request_advice("prompt", "secret")

    def test_advise_builds_prompt(self):
        self.sdk.models.generate_content.return_value = fake_response("Budget weekly.")

        advice = self.client.advise(example_set(), "  How can I save more?  ", "secret")

        self.assertEqual(advice, "Budget weekly.")
        contents = self.sdk.models.generate_content.call_args.kwargs["contents"]
        self.assertIn("Net Balance: $750.00", contents)
        self.assertIn("User Question: How can I save more?\n", contents)

    def test_advise_requires_question(self):
        with self.assertRaises(ValidationError):
            self.client.advise(example_set(), " ", "secret")
        with self.assertRaises(MissingCredentialError):
            self.client.advise(example_set(), "Help", "")
        self.factory.assert_not_called()


if __name__ == "__main__":
    unittest.main()
