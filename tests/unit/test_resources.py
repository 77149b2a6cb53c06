"""Unit tests for resource unit conversion."""

import pytest

from zun_provider.core.errors import ResourceConversionError
from zun_provider.core.resources import (
    capsule_limits,
    cores_to_quantity,
    cpu_to_cores,
    megabytes_to_quantity,
    memory_to_gigabytes,
    pod_resources,
)
from zun_provider.models.pod import ResourceRequirements


class TestWritePath:
    """Kubernetes quantities to Zun units"""

    @pytest.mark.parametrize(
        "quantity,cores",
        [("500m", 0.5), ("1", 1.0), ("2", 2.0), ("250m", 0.25), ("1.5", 1.5)],
    )
    def test_cpu_to_cores(self, quantity, cores):
        assert cpu_to_cores(quantity) == pytest.approx(cores)

    def test_cpu_rounds_up_to_whole_millicores(self):
        assert cpu_to_cores("0.0001") == pytest.approx(0.001)

    def test_memory_to_gigabytes(self):
        assert memory_to_gigabytes("256Mi") == pytest.approx(0.268435456)
        assert memory_to_gigabytes("1G") == pytest.approx(1.0)

    def test_invalid_quantity_raises(self):
        with pytest.raises(ResourceConversionError):
            cpu_to_cores("lots")

    def test_capsule_limits_converts_both_dimensions(self):
        sizing = capsule_limits(
            ResourceRequirements(limits={"cpu": "500m", "memory": "1G"})
        )
        assert sizing == {"cpu": pytest.approx(0.5), "memory": 1024}

    def test_capsule_limits_memory_in_whole_megabytes(self):
        sizing = capsule_limits(ResourceRequirements(limits={"memory": "256Mi"}))
        # 0.268435456 GB * 1024 = 274.88 MB
        assert sizing["memory"] == 275
        assert isinstance(sizing["memory"], int)

    def test_capsule_limits_skips_absent_dimensions(self):
        sizing = capsule_limits(ResourceRequirements(limits={"cpu": "2"}))
        assert sizing == {"cpu": pytest.approx(2.0)}

    def test_capsule_limits_ignores_requests(self):
        """Zun has no request concept; only limits are sent"""
        sizing = capsule_limits(
            ResourceRequirements(requests={"cpu": "100m", "memory": "64Mi"})
        )
        assert sizing == {}


class TestReadPath:
    """Zun units to Kubernetes quantities"""

    def test_cores_to_quantity(self):
        assert cores_to_quantity(0.5) == "500m"
        assert cores_to_quantity(2.0) == "2"

    @pytest.mark.parametrize("memory", ["512", "512M", "512MB", "512.0"])
    def test_megabytes_to_quantity(self, memory):
        assert megabytes_to_quantity(memory) == "512Mi"

    def test_invalid_memory_raises(self):
        with pytest.raises(ResourceConversionError):
            megabytes_to_quantity("half a gig")

    def test_pod_resources_mirror_limits_into_requests(self):
        resources = pod_resources(0.5, "512M")
        assert resources.limits == {"cpu": "500m", "memory": "512Mi"}
        assert resources.requests == resources.limits

    def test_pod_resources_without_sizing(self):
        resources = pod_resources(None, None)
        assert resources.limits is None
        assert resources.requests is None
