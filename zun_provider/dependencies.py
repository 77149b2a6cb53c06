from fastapi import HTTPException, Request, status

from zun_provider.providers.base import PodProvider


def get_provider(request: Request) -> PodProvider:
    provider = getattr(request.app.state, "provider", None)
    if provider is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Pod provider not initialized",
        )
    return provider
