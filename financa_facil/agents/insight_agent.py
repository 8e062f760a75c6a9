"""
Insight Agent (FinChat)

DESIGN DECISION: The assistant only ever sees a compact projection of the
user's latest transactions. It summarizes and advises FROM that data; it
does not answer general questions and is never trusted to compute the
balance shown on the dashboard.

BOUNDARIES:
- NEVER writes to the ledger
- NEVER raises to the UI: every failure becomes a friendly message
- Does nothing (no network call) when no API key is configured

Transient Google API errors are retried before giving up.
"""

import json
from typing import Any, Optional, Sequence

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from financa_facil.config import GeminiSettings, get_settings
from financa_facil.logs import get_logger
from financa_facil.models import Transaction

logger = get_logger(__name__)


SYSTEM_INSTRUCTION = """Você é o FinChat, um consultor financeiro pessoal amigável e direto.
Analise as transações do usuário e responda em português do Brasil com:
1. Um breve resumo do saldo (entradas menos saídas).
2. As categorias onde o usuário está gastando mais.
3. Uma dica prática e acionável para economizar.
Use formatação Markdown e valores em reais (R$). Seja conciso."""

PROMPT_PREFIX = (
    "Analise minhas últimas transações financeiras e me dê um resumo com dicas: \n\n"
)

MISSING_KEY_MESSAGE = (
    "Erro: Chave de API não configurada. Por favor, verifique a configuração."
)
EMPTY_RESPONSE_MESSAGE = "Não foi possível gerar uma análise no momento."
CONNECTION_ERROR_MESSAGE = (
    "Desculpe, ocorreu um erro ao conectar com o assistente inteligente."
)

TRANSIENT_ERRORS = (
    google_exceptions.ServiceUnavailable,
    google_exceptions.ResourceExhausted,
    google_exceptions.DeadlineExceeded,
    google_exceptions.InternalServerError,
)


class InsightError(Exception):
    """The model answered, but with nothing usable."""
    pass


def build_insight_payload(
    transactions: Sequence[Transaction],
    limit: int = 50,
) -> list[dict[str, Any]]:
    """
    Project the last `limit` transactions (collection order) to the
    compact shape sent to the model.

    d: date (YYYY-MM-DD), v: amount, c: category id, t: type
    """
    window = list(transactions)[-limit:] if limit > 0 else []
    return [
        {
            "d": t.date.date().isoformat(),
            "v": float(t.amount),
            "c": t.category,
            "t": t.type.value,
        }
        for t in window
    ]


class InsightAgent:
    """
    Generates a short financial analysis of recent transactions.

    The Gemini model is created lazily on first use so that building the
    agent never touches the network or requires a key.
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        model: Optional[Any] = None,
    ):
        self._settings = settings or get_settings().gemini
        self._model = model

    @property
    def is_available(self) -> bool:
        return self._model is not None or self._settings.is_configured

    def _get_model(self):
        """Configure Google Generative AI and build the model."""
        if self._model is None:
            genai.configure(api_key=self._settings.api_key)
            self._model = genai.GenerativeModel(
                model_name=self._settings.model_name,
                system_instruction=SYSTEM_INSTRUCTION,
                generation_config={
                    "temperature": self._settings.temperature,
                    "max_output_tokens": self._settings.max_tokens,
                },
            )
        return self._model

    def build_prompt(self, transactions: Sequence[Transaction]) -> str:
        payload = build_insight_payload(
            transactions, self._settings.transaction_window
        )
        return PROMPT_PREFIX + json.dumps(payload, ensure_ascii=False)

    @retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _request(self, prompt: str) -> str:
        response = await self._get_model().generate_content_async(prompt)

        try:
            text = response.text
        except ValueError:
            # Blocked or empty candidates
            text = ""

        if not text or not text.strip():
            raise InsightError("empty response")
        return text

    async def generate_insights(self, transactions: Sequence[Transaction]) -> str:
        """
        Ask the model for a Markdown summary with tips.

        Always returns displayable text.
        """
        if not self.is_available:
            logger.warning("insight_skipped_no_api_key")
            return MISSING_KEY_MESSAGE

        prompt = self.build_prompt(transactions)
        logger.info(
            "insight_requested",
            model=self._settings.model_name,
            transactions_sent=min(len(transactions), self._settings.transaction_window),
        )

        try:
            return await self._request(prompt)
        except InsightError:
            logger.warning("insight_empty_response")
            return EMPTY_RESPONSE_MESSAGE
        except Exception as e:
            logger.error("insight_request_failed", error=str(e), error_type=type(e).__name__)
            return CONNECTION_ERROR_MESSAGE
