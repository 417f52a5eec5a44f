"""
K3s Ingress - Generate ingress router manifests from ClusterIngress resources.

Translates a ClusterIngress and the operator-wide defaults into the
Namespace, RBAC, Deployment and Services that run the router.
"""

__version__ = "0.1.0"

from .types import (
    OperatorConfig,
    LabelSelector,
    LabelSelectorRequirement,
    SelectorOperator,
    NodePlacement,
    HighAvailabilityType,
    ClusterIngressHighAvailability,
    ClusterIngressSpec,
    ClusterIngress,
    InstallConfig,
    InstallConfigMetadata,
)

from .errors import (
    ManifestError,
    InvalidResource,
    UnsupportedSelector,
    InvalidInstallConfig,
    TemplateError,
)

from .selectors import encode_label_selector

from .generators import (
    SERVING_CERT_SECRET_ANNOTATION,
    ManifestFactory,
    certificate_secret_name,
    default_certificate_secret_name,
    default_ingress_domain,
    generate_all_manifests,
)

from .schema import (
    load_cluster_ingress,
    load_install_config,
    validate_cluster_ingress,
)

__all__ = [
    # Types
    "OperatorConfig",
    "LabelSelector",
    "LabelSelectorRequirement",
    "SelectorOperator",
    "NodePlacement",
    "HighAvailabilityType",
    "ClusterIngressHighAvailability",
    "ClusterIngressSpec",
    "ClusterIngress",
    "InstallConfig",
    "InstallConfigMetadata",
    # Errors
    "ManifestError",
    "InvalidResource",
    "UnsupportedSelector",
    "InvalidInstallConfig",
    "TemplateError",
    # Generators
    "encode_label_selector",
    "SERVING_CERT_SECRET_ANNOTATION",
    "ManifestFactory",
    "certificate_secret_name",
    "default_certificate_secret_name",
    "default_ingress_domain",
    "generate_all_manifests",
    # Schema
    "load_cluster_ingress",
    "load_install_config",
    "validate_cluster_ingress",
]
