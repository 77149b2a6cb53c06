"""
Resource unit conversion between Kubernetes quantities and Zun units.

Write path: CPU millicores become a fractional core count, memory bytes
become gigabytes (1e9) which Zun receives as whole megabytes
(gigabytes * 1024, rounded up).
Read path: Zun reports cores as a float and memory as a megabyte figure,
which come back as "<n>m" and "<n>Mi" quantities.

The two directions use different units, so a quantity does not survive a
round trip byte-for-byte. Zun has no CPU request either: only limits are sent,
and on read the request is reported equal to the limit.
"""

import math
import re
from decimal import Decimal
from typing import Dict, Optional, Union

from kubernetes.utils import parse_quantity

from zun_provider.core.errors import ResourceConversionError
from zun_provider.models.pod import ResourceRequirements

CPU = "cpu"
MEMORY = "memory"

_MEGABYTES_PATTERN = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(?:M|MB|Mi|MiB)?\s*$")


def _parse(quantity: str) -> Decimal:
    try:
        return parse_quantity(quantity)
    except (ValueError, TypeError) as e:
        raise ResourceConversionError(f"Invalid resource quantity {quantity!r}: {e}")


def cpu_to_cores(quantity: str) -> float:
    """Convert a CPU quantity such as "500m" or "2" to a core count."""
    millicores = math.ceil(_parse(quantity) * 1000)
    return millicores / 1000.0


def memory_to_gigabytes(quantity: str) -> float:
    """Convert a memory quantity such as "256Mi" to gigabytes (1e9 bytes)."""
    return math.ceil(_parse(quantity)) / 1_000_000_000.0


def gigabytes_to_megabytes(gigabytes: float) -> float:
    return gigabytes * 1024


def cores_to_quantity(cores: float) -> str:
    millicores = int(round(cores * 1000))
    if millicores % 1000 == 0:
        return str(millicores // 1000)
    return f"{millicores}m"


def megabytes_to_quantity(memory: str) -> str:
    """Convert a Zun memory figure such as "512" or "512M" to "512Mi"."""
    match = _MEGABYTES_PATTERN.match(memory)
    if not match:
        raise ResourceConversionError(f"Invalid capsule memory value {memory!r}")
    megabytes = float(match.group(1))
    if megabytes.is_integer():
        return f"{int(megabytes)}Mi"
    return f"{megabytes:g}Mi"


def capsule_limits(resources: ResourceRequirements) -> Dict[str, Union[int, float]]:
    """
    Build Zun CPU/memory sizing from a container's Kubernetes limits.

    A dimension without a limit is left out rather than set to zero. Memory
    is rounded up to a whole number of megabytes.

    Returns:
        Dict with "cpu" in cores and/or "memory" in megabytes
    """
    limits = resources.limits or {}
    sizing: Dict[str, Union[int, float]] = {}
    if CPU in limits:
        sizing[CPU] = cpu_to_cores(limits[CPU])
    if MEMORY in limits:
        megabytes = gigabytes_to_megabytes(memory_to_gigabytes(limits[MEMORY]))
        sizing[MEMORY] = math.ceil(round(megabytes, 6))
    return sizing


def pod_resources(cpu: Optional[float], memory: Optional[str]) -> ResourceRequirements:
    """Build container resources from capsule sizing; requests mirror limits."""
    limits: Dict[str, str] = {}
    if cpu is not None:
        limits[CPU] = cores_to_quantity(cpu)
    if memory:
        limits[MEMORY] = megabytes_to_quantity(memory)
    if not limits:
        return ResourceRequirements()
    return ResourceRequirements(limits=limits, requests=dict(limits))
