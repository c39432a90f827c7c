"""
Deal Advisor Service - short "is this a good deal" verdicts from an LLM.

The advisor runs after a result already exists and never raises: missing
credentials, network errors and empty responses all come back as fixed
fallback strings.
"""
import asyncio
import logging
import time
from typing import Optional

from openai import AsyncOpenAI

from ..config.settings import Settings, get_settings
from ..engine.models import DealType, DiscountType, PricingInput, PricingResult

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "AI Analysis unavailable: API Key not configured."
CONNECTION_FAILED_MESSAGE = "Unable to connect to deal analyzer."
EMPTY_RESPONSE_MESSAGE = "Could not analyze deal at this time."

SYSTEM_PROMPT = (
    "You are a savvy shopping assistant. You judge retail deals quickly "
    "and honestly."
)


def _describe_discount(p: PricingInput) -> str:
    if p.deal_type == DealType.BOGO:
        return "Buy 1 Get 1 Free"
    if p.deal_type == DealType.B2G1:
        return "Buy 2 Get 1 Free"
    if p.discount_type == DiscountType.PERCENT:
        return f"{p.discount_value}% off"
    return f"{p.discount_value} flat off"


def build_prompt(pricing_input: PricingInput, result: PricingResult) -> str:
    """Create the verdict prompt for one calculation."""
    p = pricing_input
    item = f"Item: {p.item_name}\n" if p.item_name else ""
    return (
        "Analyze this shopping deal and provide a short, witty, and helpful "
        "verdict in 2-3 sentences.\n\n"
        f"{item}"
        f"Original Price: {p.currency} {p.original_price}\n"
        f"Discount: {_describe_discount(p)}\n"
        f"Additional Coupon: {p.additional_coupon}%\n"
        f"Quantity: {p.quantity}\n"
        f"Final Total Cost (inc tax/shipping): {p.currency} {result.total_cost:.2f}\n"
        f"Total Savings: {p.currency} {result.total_saving:.2f} "
        f"({result.effective_discount_rate:.1f}%)\n\n"
        "Is this a good deal? Should the user buy it?\n"
        "Don't mention you are an AI. Just give the advice."
    )


class DealAdvisor:
    """
    Requests deal verdicts from an OpenAI chat model.

    analyze() applies last-request-wins: a call that finishes after a newer
    call was started returns None instead of its (stale) advice.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[AsyncOpenAI] = None):
        self.settings = settings or get_settings()
        self.client = client
        if self.client is None and self.settings.openai_api_key:
            self.client = AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.advisor_timeout_s,
            )
        self._generation = 0

    @property
    def available(self) -> bool:
        return self.client is not None

    async def request_advice(self, pricing_input: PricingInput, result: PricingResult) -> str:
        """Get a verdict for a calculation, or a fallback message."""
        if not self.available:
            logger.warning("Deal analysis requested without an API key")
            return UNAVAILABLE_MESSAGE

        prompt = build_prompt(pricing_input, result)
        start_time = time.time()
        try:
            response = await self.client.chat.completions.create(
                model=self.settings.advisor_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self.settings.advisor_max_tokens,
                temperature=self.settings.advisor_temperature,
            )
        except Exception as exc:
            logger.error("Deal analysis failed: %s", exc, exc_info=True)
            return CONNECTION_FAILED_MESSAGE

        duration = (time.time() - start_time) * 1000
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError):
            logger.warning("Malformed deal analysis response: %r", response)
            content = None
        if not isinstance(content, str) or not content.strip():
            logger.warning("Empty deal analysis after %.0fms", duration)
            return EMPTY_RESPONSE_MESSAGE

        logger.info("Deal analysis received in %.0fms (%d chars)", duration, len(content))
        return content.strip()

    async def analyze(self, pricing_input: PricingInput, result: PricingResult) -> Optional[str]:
        """
        Like request_advice(), but None if superseded by a newer call.

        For library callers holding one advisor per user session; the HTTP
        API is shared between clients and calls request_advice() instead.
        """
        self._generation += 1
        generation = self._generation
        advice = await self.request_advice(pricing_input, result)
        if generation != self._generation:
            logger.debug("Discarding superseded deal analysis #%d", generation)
            return None
        return advice

    async def aclose(self):
        if self.client is not None:
            await self.client.close()


def request_advice_sync(
    pricing_input: PricingInput,
    result: PricingResult,
    settings: Optional[Settings] = None,
) -> str:
    """Blocking wrapper for callers without an event loop (Streamlit)."""
    async def _run():
        advisor = DealAdvisor(settings)
        try:
            return await advisor.request_advice(pricing_input, result)
        finally:
            await advisor.aclose()

    return asyncio.run(_run())
