"""
Loading and validation of ClusterIngress and install-config documents.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
import yaml

from .types import ClusterIngress, InstallConfig

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent / "schemas"
CLUSTER_INGRESS_SCHEMA = "clusteringress-schema.json"
INSTALL_CONFIG_SCHEMA = "install-config-schema.json"


def load_schema(name: str) -> Dict[str, Any]:
    """Load a bundled JSON schema by file name."""
    with open(SCHEMA_DIR / name) as f:
        return json.load(f)


def validate_document(data: Any, schema_name: str) -> List[str]:
    """
    Validate a document against a bundled JSON schema.

    Returns list of validation errors (empty if valid).
    """
    validator = jsonschema.Draft7Validator(load_schema(schema_name))
    errors = []
    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]):
        path = ".".join(str(p) for p in error.absolute_path)
        errors.append(f"{path}: {error.message}" if path else error.message)
    return errors


def validate_cluster_ingress(data: Any) -> List[str]:
    return validate_document(data, CLUSTER_INGRESS_SCHEMA)


def validate_install_config(data: Any) -> List[str]:
    return validate_document(data, INSTALL_CONFIG_SCHEMA)


def _load_yaml(path: str, kind: str) -> Any:
    doc_path = Path(path)
    if not doc_path.exists():
        raise FileNotFoundError(f"{kind} not found at {path}")

    logger.debug("Loading %s from %s", kind, doc_path)
    with open(doc_path) as f:
        return yaml.safe_load(f)


def load_cluster_ingress(path: str, validate: bool = True) -> ClusterIngress:
    """
    Load and parse a ClusterIngress YAML file.

    Args:
        path: Path to the ClusterIngress document
        validate: Whether to validate against schema

    Returns:
        Parsed ClusterIngress

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If validation fails
    """
    data = _load_yaml(path, "ClusterIngress")

    if validate:
        errors = validate_cluster_ingress(data)
        if errors:
            raise ValueError("ClusterIngress validation failed:\n" + "\n".join(errors))

    return ClusterIngress.from_dict(data)


def load_install_config(path: str, validate: bool = True) -> InstallConfig:
    """
    Load and parse an install-config YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If validation fails
    """
    data = _load_yaml(path, "install config")

    if validate:
        errors = validate_install_config(data)
        if errors:
            raise ValueError("install config validation failed:\n" + "\n".join(errors))

    return InstallConfig.from_dict(data)
