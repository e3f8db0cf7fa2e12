from paperblog.ai.client_base import BaseAIClient
from paperblog.ai.rate_limiter import RateLimiter
from paperblog.config.settings import Settings
from paperblog.conversion.base import BaseBlogConverter
from paperblog.conversion.converter import BlogConverter
from paperblog.conversion.logo_detector import LogoDetector


class BlogConverterFactory:
    """Creates the blog converter around a shared client and rate limiter."""

    @classmethod
    def create(
        cls, settings: Settings, client: BaseAIClient, rate_limiter: RateLimiter
    ) -> BaseBlogConverter:
        logo_detector = LogoDetector(
            client=client,
            rate_limiter=rate_limiter,
            max_dimension_px=settings.logo_max_dimension_px,
        )
        return BlogConverter(
            client=client,
            rate_limiter=rate_limiter,
            logo_detector=logo_detector,
            temperature=settings.ai_temperature,
            max_tokens=settings.ai_max_output_tokens,
        )
