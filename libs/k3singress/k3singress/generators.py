"""
Kubernetes manifest generators for ingress routers.

Generates Namespace, ServiceAccount, ClusterRole, ClusterRoleBinding,
Deployment and Services for a ClusterIngress.
"""

import re
from typing import Any, Dict, List

from .assets import load_asset
from .errors import InvalidInstallConfig, InvalidResource
from .selectors import encode_label_selector, match_labels
from .types import (
    ClusterIngress,
    ClusterIngressSpec,
    HighAvailabilityType,
    InstallConfig,
    OperatorConfig,
)

SERVING_CERT_SECRET_ANNOTATION = "service.alpha.openshift.io/serving-cert-secret-name"
DEFAULT_NODE_SELECTOR: Dict[str, str] = {"node-role.kubernetes.io/worker": ""}
DEFAULT_CLUSTER_INGRESS_NAME = "default"
DEFAULT_REPLICAS = 1

_DNS_LABEL = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
# Longest derived name is router-internal-<name>, itself a DNS label
MAX_NAME_LENGTH = 63 - len("router-internal-")


def _validate_name(ci: ClusterIngress) -> None:
    """Ensure the resource name can be used to derive object names."""
    if not ci.name:
        raise InvalidResource("ClusterIngress name must not be empty")
    if not _DNS_LABEL.match(ci.name):
        raise InvalidResource(
            f"ClusterIngress name {ci.name!r} is not a valid DNS label"
        )
    if len(ci.name) > MAX_NAME_LENGTH:
        raise InvalidResource(
            f"ClusterIngress name {ci.name!r} is longer than {MAX_NAME_LENGTH} characters"
        )


def router_deployment_name(ci: ClusterIngress) -> str:
    return f"router-{ci.name}"


def router_internal_service_name(ci: ClusterIngress) -> str:
    return f"router-internal-{ci.name}"


def default_certificate_secret_name(ci: ClusterIngress) -> str:
    """Default serving certificate secret for a router."""
    return f"router-certs-{ci.name}"


def certificate_secret_name(ci: ClusterIngress) -> str:
    """Explicit certificate secret if set, else the default one."""
    if ci.spec.default_certificate_secret is not None:
        return ci.spec.default_certificate_secret
    return default_certificate_secret_name(ci)


def node_selector(ci: ClusterIngress) -> Dict[str, str]:
    """
    Resolve the pod node selector for a router.

    An override replaces the default entirely; labels are never merged.

    Raises:
        UnsupportedSelector: If the override uses matchExpressions
        InvalidResource: If the override is present but selects nothing
    """
    placement = ci.spec.node_placement
    if placement is None or placement.node_selector is None:
        return dict(DEFAULT_NODE_SELECTOR)

    labels = match_labels(placement.node_selector)
    if not labels:
        raise InvalidResource(
            f"ClusterIngress {ci.name!r} has an empty nodePlacement.nodeSelector"
        )
    return labels


def default_ingress_domain(install_config: InstallConfig) -> str:
    """Ingress domain derived from the cluster name and base domain."""
    return f"{install_config.metadata.name}.{install_config.base_domain}"


def _router_labels(ci: ClusterIngress) -> Dict[str, str]:
    return {
        "app": "router",
        "router": router_deployment_name(ci),
    }


class ManifestFactory:
    """
    Builds router manifests from a ClusterIngress.

    The factory only reads its OperatorConfig and the resource passed to
    each method, and every method returns newly allocated dicts.
    """

    def __init__(self, config: OperatorConfig):
        self._config = config

    @property
    def config(self) -> OperatorConfig:
        return self._config

    def router_namespace(self) -> Dict[str, Any]:
        return load_asset("namespace")

    def router_service_account(self) -> Dict[str, Any]:
        return load_asset("service-account")

    def router_cluster_role(self) -> Dict[str, Any]:
        return load_asset("cluster-role")

    def router_cluster_role_binding(self) -> Dict[str, Any]:
        return load_asset("cluster-role-binding")

    def router_deployment(self, ci: ClusterIngress) -> Dict[str, Any]:
        """
        Generate the router Deployment.

        Args:
            ci: ClusterIngress resource

        Returns:
            Deployment manifest dict

        Raises:
            InvalidResource: If the name is empty or not a DNS label, the
                node placement override is empty, or replicas is negative
            UnsupportedSelector: If any selector uses matchExpressions
        """
        _validate_name(ci)
        spec = ci.spec

        # Resolve everything that can fail before touching the template
        namespace_labels = encode_label_selector(spec.namespace_selector)
        route_labels = encode_label_selector(spec.route_selector)
        pod_node_selector = node_selector(ci)
        replicas = _replicas(ci.name, spec)

        deployment = load_asset("deployment")
        name = router_deployment_name(ci)
        labels = _router_labels(ci)

        deployment["metadata"]["name"] = name
        deployment["metadata"]["labels"] = dict(labels)
        deployment["spec"]["replicas"] = replicas
        deployment["spec"]["selector"]["matchLabels"] = dict(labels)

        template = deployment["spec"]["template"]
        template["metadata"]["labels"] = dict(labels)

        pod_spec = template["spec"]
        pod_spec["nodeSelector"] = pod_node_selector

        container = pod_spec["containers"][0]
        container["image"] = self._config.router_image

        env: List[Dict[str, Any]] = container["env"]
        env.append({"name": "ROUTER_SERVICE_NAME", "value": ci.name})
        if spec.ingress_domain:
            env.append({"name": "ROUTER_CANONICAL_HOSTNAME", "value": spec.ingress_domain})
        if namespace_labels:
            env.append({"name": "NAMESPACE_LABELS", "value": namespace_labels})
        if route_labels:
            env.append({"name": "ROUTE_LABELS", "value": route_labels})

        pod_spec["volumes"][0]["secret"]["secretName"] = certificate_secret_name(ci)

        return deployment

    def router_service_internal(self, ci: ClusterIngress) -> Dict[str, Any]:
        """
        Generate the cluster-internal router Service.

        The serving certificate annotation names the same secret the
        Deployment mounts.
        """
        _validate_name(ci)

        service = load_asset("service-internal")
        service["metadata"]["name"] = router_internal_service_name(ci)
        service["metadata"]["labels"] = _router_labels(ci)
        service["metadata"]["annotations"] = {
            SERVING_CERT_SECRET_ANNOTATION: certificate_secret_name(ci),
        }
        service["spec"]["selector"] = _router_labels(ci)

        return service

    def router_service_cloud(self, ci: ClusterIngress) -> Dict[str, Any]:
        """Generate the LoadBalancer Service exposing the router."""
        _validate_name(ci)

        service = load_asset("service-cloud")
        service["metadata"]["name"] = router_deployment_name(ci)
        service["metadata"]["labels"] = _router_labels(ci)
        service["spec"]["selector"] = _router_labels(ci)

        return service

    def default_cluster_ingress(self, install_config: InstallConfig) -> ClusterIngress:
        """
        Build the baseline ClusterIngress for a freshly installed cluster.

        Args:
            install_config: Install-time cluster configuration

        Returns:
            ClusterIngress named "default" with a computed ingress domain

        Raises:
            InvalidInstallConfig: If the cluster name or base domain is empty
        """
        if not install_config.metadata.name:
            raise InvalidInstallConfig("install config metadata.name must not be empty")
        if not install_config.base_domain:
            raise InvalidInstallConfig("install config baseDomain must not be empty")

        return ClusterIngress(
            name=DEFAULT_CLUSTER_INGRESS_NAME,
            spec=ClusterIngressSpec(
                ingress_domain=default_ingress_domain(install_config),
            ),
        )


def _replicas(name: str, spec: ClusterIngressSpec) -> int:
    if spec.replicas is None:
        return DEFAULT_REPLICAS
    if isinstance(spec.replicas, bool) or not isinstance(spec.replicas, int) or spec.replicas < 0:
        raise InvalidResource(
            f"ClusterIngress {name!r} has invalid replicas: {spec.replicas!r}"
        )
    return spec.replicas


def generate_all_manifests(
    factory: ManifestFactory,
    ci: ClusterIngress,
) -> List[Dict[str, Any]]:
    """
    Generate all router manifests for a ClusterIngress, in apply order.

    Args:
        factory: Manifest factory
        ci: ClusterIngress resource

    Returns:
        List of manifest dicts
    """
    manifests = [
        factory.router_namespace(),
        factory.router_service_account(),
        factory.router_cluster_role(),
        factory.router_cluster_role_binding(),
        factory.router_deployment(ci),
        factory.router_service_internal(ci),
    ]

    ha = ci.spec.high_availability
    if ha is not None and ha.type == HighAvailabilityType.CLOUD:
        manifests.append(factory.router_service_cloud(ci))

    return manifests

