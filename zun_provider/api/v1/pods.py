from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import PlainTextResponse
from typing import List
import logging

from zun_provider.core.errors import TranslationError
from zun_provider.dependencies import get_provider
from zun_provider.models.pod import ObjectMeta, Pod, PodStatus
from zun_provider.providers.base import PodProvider
from zun_provider.services.zun_client import (
    ZunAuthenticationError,
    ZunClientError,
    ZunNotFoundError,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, ZunNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pod not found")
    if isinstance(e, TranslationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if isinstance(e, ZunAuthenticationError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    logger.error(f"Zun API error: {e}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.get("/pods", response_model=List[Pod])
def list_pods(provider: PodProvider = Depends(get_provider)):
    try:
        return provider.get_pods()
    except ZunClientError as e:
        raise _http_error(e)


@router.post("/pods", status_code=status.HTTP_201_CREATED)
def create_pod(pod: Pod, provider: PodProvider = Depends(get_provider)):
    try:
        provider.create_pod(pod)
    except (ZunClientError, TranslationError) as e:
        raise _http_error(e)
    return Response(status_code=status.HTTP_201_CREATED)


@router.put("/pods", status_code=status.HTTP_204_NO_CONTENT)
def update_pod(pod: Pod, provider: PodProvider = Depends(get_provider)):
    provider.update_pod(pod)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/pods/{namespace}/{name}", response_model=Pod)
def read_pod(namespace: str, name: str, provider: PodProvider = Depends(get_provider)):
    try:
        pod = provider.get_pod(namespace, name)
    except (ZunClientError, TranslationError) as e:
        raise _http_error(e)
    if pod is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pod not found")
    return pod


@router.get("/pods/{namespace}/{name}/status", response_model=PodStatus)
def read_pod_status(namespace: str, name: str, provider: PodProvider = Depends(get_provider)):
    try:
        pod_status = provider.get_pod_status(namespace, name)
    except (ZunClientError, TranslationError) as e:
        raise _http_error(e)
    if pod_status is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pod not found")
    return pod_status


@router.delete("/pods/{namespace}/{name}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pod(namespace: str, name: str, provider: PodProvider = Depends(get_provider)):
    pod = Pod(metadata=ObjectMeta(namespace=namespace, name=name))
    try:
        provider.delete_pod(pod)
    except ZunClientError as e:
        raise _http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/pods/{namespace}/{name}/containers/{container}/logs",
    response_class=PlainTextResponse,
)
def read_container_logs(
    namespace: str,
    name: str,
    container: str,
    tail: int = 100,
    provider: PodProvider = Depends(get_provider),
):
    return provider.get_container_logs(namespace, name, container, tail)
