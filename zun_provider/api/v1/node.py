from fastapi import APIRouter, Depends
from typing import Dict, List

from zun_provider.dependencies import get_provider
from zun_provider.models.pod import NodeAddress, NodeCondition, NodeDaemonEndpoints
from zun_provider.providers.base import PodProvider

router = APIRouter(prefix="/node")


@router.get("/capacity", response_model=Dict[str, str])
def read_capacity(provider: PodProvider = Depends(get_provider)):
    return provider.capacity()


@router.get("/conditions", response_model=List[NodeCondition])
def read_conditions(provider: PodProvider = Depends(get_provider)):
    return provider.node_conditions()


@router.get("/addresses", response_model=List[NodeAddress])
def read_addresses(provider: PodProvider = Depends(get_provider)):
    return provider.node_addresses()


@router.get("/daemon-endpoints", response_model=NodeDaemonEndpoints)
def read_daemon_endpoints(provider: PodProvider = Depends(get_provider)):
    return provider.node_daemon_endpoints()


@router.get("/operating-system")
def read_operating_system(provider: PodProvider = Depends(get_provider)):
    return {"operatingSystem": provider.operating_system()}
