"""
Manifest templates for the router.

Each template is parsed on every call, so callers always receive a fresh
object graph they are free to mutate.
"""

from typing import Any, Dict

import yaml

from .errors import TemplateError

ROUTER_NAMESPACE = "openshift-ingress"
ROUTER_SERVICE_ACCOUNT = "router"
ROUTER_CLUSTER_ROLE = "openshift-ingress-router"

ASSETS: Dict[str, str] = {
    "namespace": f"""
apiVersion: v1
kind: Namespace
metadata:
  name: {ROUTER_NAMESPACE}
  labels:
    name: {ROUTER_NAMESPACE}
""",
    "service-account": f"""
apiVersion: v1
kind: ServiceAccount
metadata:
  name: {ROUTER_SERVICE_ACCOUNT}
  namespace: {ROUTER_NAMESPACE}
""",
    "cluster-role": f"""
apiVersion: rbac.authorization.k8s.io/v1
kind: ClusterRole
metadata:
  name: {ROUTER_CLUSTER_ROLE}
rules:
- apiGroups: [""]
  resources: [endpoints, namespaces, services]
  verbs: [list, watch]
- apiGroups: [authentication.k8s.io]
  resources: [tokenreviews]
  verbs: [create]
- apiGroups: [authorization.k8s.io]
  resources: [subjectaccessreviews]
  verbs: [create]
- apiGroups: [route.openshift.io]
  resources: [routes]
  verbs: [list, watch]
- apiGroups: [route.openshift.io]
  resources: [routes/status]
  verbs: [update]
""",
    "cluster-role-binding": f"""
apiVersion: rbac.authorization.k8s.io/v1
kind: ClusterRoleBinding
metadata:
  name: {ROUTER_CLUSTER_ROLE}
roleRef:
  apiGroup: rbac.authorization.k8s.io
  kind: ClusterRole
  name: {ROUTER_CLUSTER_ROLE}
subjects:
- kind: ServiceAccount
  name: {ROUTER_SERVICE_ACCOUNT}
  namespace: {ROUTER_NAMESPACE}
""",
    "deployment": f"""
apiVersion: apps/v1
kind: Deployment
metadata:
  namespace: {ROUTER_NAMESPACE}
  labels:
    app: router
spec:
  replicas: 1
  selector:
    matchLabels:
      app: router
  template:
    metadata:
      labels:
        app: router
    spec:
      serviceAccountName: {ROUTER_SERVICE_ACCOUNT}
      priorityClassName: system-cluster-critical
      containers:
      - name: router
        imagePullPolicy: IfNotPresent
        ports:
        - name: http
          containerPort: 80
          protocol: TCP
        - name: https
          containerPort: 443
          protocol: TCP
        - name: metrics
          containerPort: 1936
          protocol: TCP
        env:
        - name: STATS_PORT
          value: "1936"
        - name: ROUTER_SERVICE_NAMESPACE
          value: {ROUTER_NAMESPACE}
        - name: DEFAULT_CERTIFICATE_DIR
          value: /etc/pki/tls/private
        livenessProbe:
          httpGet:
            path: /healthz
            port: 1936
          initialDelaySeconds: 10
        readinessProbe:
          httpGet:
            path: /healthz
            port: 1936
          initialDelaySeconds: 10
        resources:
          requests:
            cpu: 100m
            memory: 256Mi
        volumeMounts:
        - name: default-certificate
          mountPath: /etc/pki/tls/private
          readOnly: true
      volumes:
      - name: default-certificate
        secret:
          defaultMode: 420
""",
    "service-internal": f"""
apiVersion: v1
kind: Service
metadata:
  namespace: {ROUTER_NAMESPACE}
  labels:
    app: router
spec:
  type: ClusterIP
  selector:
    app: router
  ports:
  - name: http
    port: 80
    protocol: TCP
    targetPort: http
  - name: https
    port: 443
    protocol: TCP
    targetPort: https
  - name: metrics
    port: 1936
    protocol: TCP
    targetPort: 1936
""",
    "service-cloud": f"""
apiVersion: v1
kind: Service
metadata:
  namespace: {ROUTER_NAMESPACE}
  labels:
    app: router
spec:
  type: LoadBalancer
  externalTrafficPolicy: Local
  selector:
    app: router
  ports:
  - name: http
    port: 80
    protocol: TCP
    targetPort: http
  - name: https
    port: 443
    protocol: TCP
    targetPort: https
""",
}

ASSET_KINDS: Dict[str, str] = {
    "namespace": "Namespace",
    "service-account": "ServiceAccount",
    "cluster-role": "ClusterRole",
    "cluster-role-binding": "ClusterRoleBinding",
    "deployment": "Deployment",
    "service-internal": "Service",
    "service-cloud": "Service",
}


def load_asset(name: str) -> Dict[str, Any]:
    """
    Parse a manifest template into a new dict.

    Args:
        name: Template name (key of ASSETS)

    Returns:
        Manifest dict

    Raises:
        TemplateError: If the template is unknown, not valid YAML, or not
            the expected kind
    """
    try:
        text = ASSETS[name]
    except KeyError:
        raise TemplateError(f"unknown manifest template: {name}") from None

    try:
        manifest = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise TemplateError(f"manifest template {name} is not valid YAML: {e}") from e

    if not isinstance(manifest, dict):
        raise TemplateError(f"manifest template {name} is not a mapping")

    expected_kind = ASSET_KINDS.get(name)
    if manifest.get("kind") != expected_kind or not manifest.get("apiVersion"):
        raise TemplateError(
            f"manifest template {name} has kind {manifest.get('kind')!r}, "
            f"expected {expected_kind!r}"
        )

    manifest.setdefault("metadata", {})
    return manifest
