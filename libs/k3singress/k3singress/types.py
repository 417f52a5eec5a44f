"""
Type definitions for k3singress.

These dataclasses represent the ClusterIngress custom resource, the
install-time cluster config and the operator-wide defaults.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

DEFAULT_ROUTER_IMAGE = "quay.io/openshift/origin-haproxy-router:latest"
CLUSTER_INGRESS_API_VERSION = "ingress.openshift.io/v1alpha1"
CLUSTER_INGRESS_NAMESPACE = "openshift-ingress-operator"


class SelectorOperator(str, Enum):
    """Set-based label selector operator."""
    IN = "In"
    NOT_IN = "NotIn"
    EXISTS = "Exists"
    DOES_NOT_EXIST = "DoesNotExist"


class HighAvailabilityType(str, Enum):
    """How the router is exposed outside the cluster.

    - CLOUD: a cloud load balancer Service fronts the router
    - USER_DEFINED: exposure is left to the cluster administrator
    """
    CLOUD = "Cloud"
    USER_DEFINED = "UserDefined"


@dataclass(frozen=True)
class OperatorConfig:
    """Process-wide operator defaults, fixed at factory construction."""
    router_image: str = DEFAULT_ROUTER_IMAGE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "OperatorConfig":
        """Read ROUTER_IMAGE from the environment, falling back to the default image."""
        if environ is None:
            environ = os.environ
        return cls(router_image=environ.get("ROUTER_IMAGE") or DEFAULT_ROUTER_IMAGE)


@dataclass
class LabelSelectorRequirement:
    """A single set-based selector term."""
    key: str
    operator: SelectorOperator
    values: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict) -> "LabelSelectorRequirement":
        return cls(
            key=data["key"],
            operator=SelectorOperator(data["operator"]),
            values=list(data.get("values") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"key": self.key, "operator": self.operator.value}
        if self.values:
            result["values"] = list(self.values)
        return result


@dataclass
class LabelSelector:
    """Kubernetes label selector (matchLabels plus matchExpressions)."""
    match_labels: Dict[str, str] = field(default_factory=dict)
    match_expressions: List[LabelSelectorRequirement] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> Optional["LabelSelector"]:
        # An explicit {} is a present-but-empty selector, not an absent one
        if data is None:
            return None
        return cls(
            match_labels=dict(data.get("matchLabels") or {}),
            match_expressions=[
                LabelSelectorRequirement.from_dict(e)
                for e in data.get("matchExpressions") or []
            ],
        )

    def is_empty(self) -> bool:
        """Check if the selector has no terms at all."""
        return not self.match_labels and not self.match_expressions

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.match_labels:
            result["matchLabels"] = dict(self.match_labels)
        if self.match_expressions:
            result["matchExpressions"] = [e.to_dict() for e in self.match_expressions]
        return result


@dataclass
class NodePlacement:
    """Node placement override for router pods."""
    node_selector: Optional[LabelSelector] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> Optional["NodePlacement"]:
        if data is None:
            return None
        return cls(node_selector=LabelSelector.from_dict(data.get("nodeSelector")))

    def to_dict(self) -> Dict[str, Any]:
        if self.node_selector is None:
            return {}
        return {"nodeSelector": self.node_selector.to_dict()}


@dataclass
class ClusterIngressHighAvailability:
    """High availability strategy for a router."""
    type: HighAvailabilityType = HighAvailabilityType.CLOUD

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> Optional["ClusterIngressHighAvailability"]:
        if data is None:
            return None
        ha_type = data.get("type")
        return cls(
            type=HighAvailabilityType(ha_type) if ha_type else HighAvailabilityType.CLOUD,
        )


@dataclass
class ClusterIngressSpec:
    """Desired state of a ClusterIngress. None means "use the default"."""
    ingress_domain: Optional[str] = None
    namespace_selector: Optional[LabelSelector] = None
    route_selector: Optional[LabelSelector] = None
    default_certificate_secret: Optional[str] = None
    node_placement: Optional[NodePlacement] = None
    replicas: Optional[int] = None
    high_availability: Optional[ClusterIngressHighAvailability] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "ClusterIngressSpec":
        if not data:
            return cls()
        return cls(
            ingress_domain=data.get("ingressDomain"),
            namespace_selector=LabelSelector.from_dict(data.get("namespaceSelector")),
            route_selector=LabelSelector.from_dict(data.get("routeSelector")),
            default_certificate_secret=data.get("defaultCertificateSecret"),
            node_placement=NodePlacement.from_dict(data.get("nodePlacement")),
            replicas=data.get("replicas"),
            high_availability=ClusterIngressHighAvailability.from_dict(
                data.get("highAvailability")
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.ingress_domain is not None:
            result["ingressDomain"] = self.ingress_domain
        if self.namespace_selector is not None:
            result["namespaceSelector"] = self.namespace_selector.to_dict()
        if self.route_selector is not None:
            result["routeSelector"] = self.route_selector.to_dict()
        if self.default_certificate_secret is not None:
            result["defaultCertificateSecret"] = self.default_certificate_secret
        if self.node_placement is not None:
            result["nodePlacement"] = self.node_placement.to_dict()
        if self.replicas is not None:
            result["replicas"] = self.replicas
        if self.high_availability is not None:
            result["highAvailability"] = {"type": self.high_availability.type.value}
        return result


@dataclass
class ClusterIngress:
    """The ClusterIngress custom resource describing one router instance."""
    name: str
    namespace: str = CLUSTER_INGRESS_NAMESPACE
    spec: ClusterIngressSpec = field(default_factory=ClusterIngressSpec)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "ClusterIngress":
        data = data or {}
        metadata = data.get("metadata") or {}
        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace") or CLUSTER_INGRESS_NAMESPACE,
            spec=ClusterIngressSpec.from_dict(data.get("spec")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Render the resource as a Kubernetes document."""
        return {
            "apiVersion": CLUSTER_INGRESS_API_VERSION,
            "kind": "ClusterIngress",
            "metadata": {
                "name": self.name,
                "namespace": self.namespace,
            },
            "spec": self.spec.to_dict(),
        }


@dataclass
class InstallConfigMetadata:
    """Metadata section of the install config."""
    name: str = ""


@dataclass
class InstallConfig:
    """Install-time cluster configuration (only the fields this tool reads)."""
    metadata: InstallConfigMetadata = field(default_factory=InstallConfigMetadata)
    base_domain: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "InstallConfig":
        if not data:
            return cls()
        metadata = data.get("metadata") or {}
        return cls(
            metadata=InstallConfigMetadata(name=metadata.get("name", "")),
            base_domain=data.get("baseDomain", ""),
        )
