"""API endpoints for weather-driven trading analysis."""

import logging
from datetime import datetime, timezone
from typing import AsyncIterator, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from weather_trader.analysis.models import CamelModel, TradingAnalysis
from weather_trader.analysis.report import generate_trading_analysis
from weather_trader.analysis.statistics import compute_weather_statistics
from weather_trader.config import (
    LLM_API_KEY, LLM_MODEL, LLM_PROVIDER, LLM_RETRY_DELAY_SECONDS, LLM_TIMEOUT_SECONDS
)
from weather_trader.narrative.generator import (
    NarrativeConfig, NarrativeGenerationError, NarrativeGenerator, UnknownProviderError
)
from weather_trader.narrative.prompt import build_trading_prompt, generate_fallback_advice
from weather_trader.weather.models import Location, RawWeatherBundle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trading", tags=["trading"])

NARRATIVE_DISCLAIMER = (
    "AI-generated analysis for educational purposes only. Not financial advice. Always conduct your "
    "own research and consult with financial professionals before making investment decisions."
)
NOT_CONFIGURED_MESSAGE = "AI analysis not configured. Set LLM_API_KEY environment variable to enable."


class TradingRequest(CamelModel):
    """Request body shared by the trading endpoints."""
    location: Optional[Location] = None
    weather_data: Optional[RawWeatherBundle] = None


def require_inputs(body: TradingRequest) -> Tuple[Location, RawWeatherBundle]:
    """Raise 400 unless both the location and weather data were supplied."""
    if body.location is None or body.weather_data is None:
        raise HTTPException(status_code=400, detail="Location and weather data are required")
    return body.location, body.weather_data


def get_narrative_config() -> NarrativeConfig:
    """Dependency building the narrative settings from configuration."""
    return NarrativeConfig(
        provider=LLM_PROVIDER,
        api_key=LLM_API_KEY,
        model=LLM_MODEL,
        timeout_seconds=LLM_TIMEOUT_SECONDS,
        retry_delay_seconds=LLM_RETRY_DELAY_SECONDS,
    )


async def get_narrative_generator(
    config: NarrativeConfig = Depends(get_narrative_config),
) -> AsyncIterator[NarrativeGenerator]:
    """Dependency yielding a narrative generator closed after the request."""
    async with NarrativeGenerator(config) as generator:
        yield generator


@router.post("/analyze", response_model=TradingAnalysis)
async def analyze(body: TradingRequest) -> TradingAnalysis:
    """Rule-based analysis: conditions summary, outlooks and ranked trades."""
    location, bundle = require_inputs(body)
    try:
        return generate_trading_analysis(location, bundle)
    except Exception as e:
        logger.error(f"Unexpected error generating trading analysis for {location.name}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate trading analysis")


@router.post("/ai-analysis")
async def ai_analysis(
    body: TradingRequest,
    generator: NarrativeGenerator = Depends(get_narrative_generator),
):
    """Narrative analysis from the configured LLM provider.

    Falls back to rule-based advice when no provider is configured, and
    attaches that advice to error responses.
    """
    location, bundle = require_inputs(body)
    config = generator.config

    now = datetime.now(timezone.utc)
    stats = compute_weather_statistics(bundle, now)
    fallback_advice = generate_fallback_advice(location, stats)

    if not config.is_configured:
        logger.info("Narrative provider not configured, returning fallback advice")
        return {"available": False, "message": NOT_CONFIGURED_MESSAGE, "fallbackAdvice": fallback_advice}

    prompt = build_trading_prompt(location, bundle.forecast, stats, now)
    try:
        analysis = await generator.generate(prompt)
    except UnknownProviderError as e:
        logger.warning(str(e))
        return {"available": False, "message": str(e), "fallbackAdvice": fallback_advice}
    except NarrativeGenerationError as e:
        logger.error(f"AI analysis error: {e.message} ({e.details})")
        return JSONResponse(
            status_code=500,
            content={
                "error": e.message,
                "details": e.details,
                "provider": config.provider,
                "fallbackAdvice": fallback_advice,
            },
        )

    return {
        "available": True,
        "analysis": analysis,
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "provider": config.provider,
        "disclaimer": NARRATIVE_DISCLAIMER,
    }
