"""
CLI for k3singress - router manifest generator for ClusterIngress resources.

Commands:
    generate    Generate router manifests for a ClusterIngress
    default     Print the default ClusterIngress for an install config
    validate    Validate a ClusterIngress document
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .errors import ManifestError
from .generators import ManifestFactory, generate_all_manifests
from .schema import load_cluster_ingress, load_install_config, validate_cluster_ingress
from .types import DEFAULT_ROUTER_IMAGE, OperatorConfig

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="k3singress",
        description="Generate ingress router manifests from ClusterIngress resources",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--router-image",
        help=f"Router container image (default: $ROUTER_IMAGE or {DEFAULT_ROUTER_IMAGE})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # generate command
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate router manifests for a ClusterIngress",
    )
    gen_parser.add_argument(
        "-f", "--file",
        default="clusteringress.yaml",
        help="Path to ClusterIngress YAML (default: clusteringress.yaml)",
    )
    gen_parser.add_argument(
        "-o", "--output",
        help="Output directory (default: stdout)",
    )
    gen_parser.add_argument(
        "--format",
        choices=["yaml", "json"],
        default="yaml",
        help="Output format (default: yaml)",
    )

    # default command
    default_parser = subparsers.add_parser(
        "default",
        help="Print the default ClusterIngress for an install config",
    )
    default_parser.add_argument(
        "--install-config",
        default="install-config.yaml",
        help="Path to install-config.yaml (default: install-config.yaml)",
    )
    default_parser.add_argument(
        "--format",
        choices=["yaml", "json"],
        default="yaml",
        help="Output format (default: yaml)",
    )

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a ClusterIngress document",
    )
    validate_parser.add_argument(
        "-f", "--file",
        default="clusteringress.yaml",
        help="Path to ClusterIngress YAML (default: clusteringress.yaml)",
    )

    return parser


def create_factory(args: argparse.Namespace) -> ManifestFactory:
    """Build the factory from --router-image or the environment."""
    if args.router_image:
        config = OperatorConfig(router_image=args.router_image)
    else:
        config = OperatorConfig.from_env()
    logger.debug("Using router image %s", config.router_image)
    return ManifestFactory(config)


def render_manifests(manifests: list, output_format: str) -> str:
    """Render manifests as multi-document YAML or a JSON list."""
    if output_format == "json":
        return json.dumps(manifests, indent=2)

    docs = []
    for m in manifests:
        docs.append(yaml.dump(m, default_flow_style=False, sort_keys=False))
    return "---\n" + "---\n".join(docs)


def output_manifests(
    manifests: list,
    output_format: str,
    output_path: Optional[str] = None,
    name: Optional[str] = None,
) -> None:
    """Output manifests to file or stdout."""
    content = render_manifests(manifests, output_format)

    if output_path:
        out_dir = Path(output_path)
        out_dir.mkdir(parents=True, exist_ok=True)

        filename = f"{name or 'router'}.{output_format}"
        out_file = out_dir / filename
        out_file.write_text(content)
        logger.info("Written: %s", out_file)
    else:
        print(content)


def cmd_generate(args: argparse.Namespace) -> int:
    """Handle generate command."""
    try:
        ci = load_cluster_ingress(args.file)
        manifests = generate_all_manifests(create_factory(args), ci)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1
    except ValueError as e:
        # ManifestError is a ValueError
        logger.error("%s", e)
        return 1

    output_manifests(manifests, args.format, args.output, name=f"router-{ci.name}")
    logger.debug("Generated %d manifests for ClusterIngress %s", len(manifests), ci.name)
    return 0


def cmd_default(args: argparse.Namespace) -> int:
    """Handle default command."""
    try:
        install_config = load_install_config(args.install_config)
        ci = create_factory(args).default_cluster_ingress(install_config)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1
    except ValueError as e:
        logger.error("%s", e)
        return 1

    output_manifests([ci.to_dict()], args.format)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    doc_path = Path(args.file)
    if not doc_path.exists():
        logger.error("ClusterIngress not found at %s", args.file)
        return 1

    with open(doc_path) as f:
        data = yaml.safe_load(f)

    errors = validate_cluster_ingress(data)
    if errors:
        print("Validation errors:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        return 1

    # Schema-valid documents can still be rejected by the generators
    try:
        ci = load_cluster_ingress(args.file, validate=False)
        generate_all_manifests(create_factory(args), ci)
    except ManifestError as e:
        print(f"Invalid ClusterIngress: {e}", file=sys.stderr)
        return 1

    print(f"✓ {args.file} is valid")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "generate": cmd_generate,
        "default": cmd_default,
        "validate": cmd_validate,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
