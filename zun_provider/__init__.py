"""
zun-provider: run Kubernetes pods on OpenStack Zun.

Translates pods into Zun capsules and capsules back into pods and pod
statuses for a virtual-node control plane.
"""

__version__ = "0.1.0"
