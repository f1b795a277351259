"""CLI commands for the model editor"""

import sys
import argparse
import asyncio
import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from modeled.services.config_gateway import ConfigGateway
from modeled.services.errors import CatalogValidationError
from modeled.services.models_store import load_catalog_file, validate_catalog
from modeled.utils.config_loader import get_config, reload_config
from modeled.utils.logger import setup_logger


def validate_config():
    """Validate configuration files"""
    print("Validating configuration...")

    try:
        config = get_config()
        print("✓ Configuration file loaded successfully")

        for section in config.required_sections:
            if config.get_section(section):
                print(f"✓ Section [{section}] present")
            else:
                print(f"✗ Section [{section}] missing")
                return False

        print(f"✓ Server address {config.app.host}:{config.app.port}")
        print(f"✓ Editor backend {config.editor.backend_url}")

        models_file = Path(config.storage.models_file)
        if models_file.exists():
            print(f"✓ Catalog file {models_file} exists")
        else:
            print(f"⚠ Catalog file {models_file} does not exist (GET /api/models will fail)")

        print("\n✓ Configuration validation passed")
        return True

    except (OSError, ValueError) as e:
        print(f"\n✗ Configuration validation failed: {e}")
        return False


def check_models(path: Optional[str] = None):
    """Run the server-side catalog validation against a file"""
    if path is None:
        path = get_config().storage.models_file

    print(f"Checking catalog {path}...")

    try:
        catalog = load_catalog_file(path)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"✗ Could not read catalog: {e}")
        return False

    print(f"✓ Parsed {len(catalog.model_list())} models ({catalog.schema_variant} schema)")

    try:
        validate_catalog(catalog)
    except CatalogValidationError as e:
        print(f"✗ Invalid configuration: {e}")
        return False

    dangling = [
        ref.name
        for field in ("default_models", "narrator_models", "default_vision_models")
        for ref in catalog.resolve_list(field)
        if ref.dangling
    ]
    if dangling:
        print(f"⚠ Unresolved names: {', '.join(dangling)}")

    print("\n✓ Catalog validation passed")
    return True


async def health_check():
    """Check that the catalog endpoints answer"""
    print("Performing health check...\n")

    config = get_config()
    setup_logger(log_level=config.app.log_level, log_file=None)

    gateway = ConfigGateway.from_config(config.editor)
    print(f"Checking catalog backend at {gateway.base_url}...")

    if await gateway.health_check():
        print("✓ Catalog backend is reachable")
        print("\n✓ All health checks passed")
        return 0

    print("✗ Catalog backend is not reachable")
    print("\n✗ Some health checks failed")
    return 1


def serve(host: Optional[str] = None, port: Optional[int] = None):
    """Run the editor server"""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "modeled.main:app",
        host=host or config.app.host,
        port=port or config.app.port
    )
    return 0


def main():
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(description="Model editor CLI")
    parser.add_argument(
        '--config',
        default=None,
        help='Path to config.toml (default: ./config.toml)'
    )
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    subparsers.add_parser('validate-config', help='Validate configuration files')

    check_parser = subparsers.add_parser('check-models', help='Validate a catalog file')
    check_parser.add_argument('path', nargs='?', default=None, help='Catalog file (default: from config)')

    subparsers.add_parser('health', help='Perform health check')

    serve_parser = subparsers.add_parser('serve', help='Run the editor server')
    serve_parser.add_argument('--host', default=None)
    serve_parser.add_argument('--port', type=int, default=None)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    if args.config:
        try:
            reload_config(args.config)
        except (OSError, ValueError) as e:
            print(f"✗ {e}")
            return 1

    if args.command == 'validate-config':
        result = validate_config()
        return 0 if result else 1

    elif args.command == 'check-models':
        result = check_models(args.path)
        return 0 if result else 1

    elif args.command == 'health':
        return asyncio.run(health_check())

    elif args.command == 'serve':
        return serve(args.host, args.port)

    else:
        print(f"Unknown command: {args.command}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
