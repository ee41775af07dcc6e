"""
forwardgen CLI - 転送アクセサ生成ツール Command Line Interface

Usage:
    python -m forwardgen validate <spec_file> [--verbose]
    python -m forwardgen gen <spec_file> [--output FILE] [--config CFG] [--overwrite]
    python -m forwardgen check <spec_file>
    python -m forwardgen version
"""

import logging
import sys
from pathlib import Path

import fire

from forwardgen import __version__
from forwardgen.backends.py_accessors import write_accessor_module
from forwardgen.core.base.ir import SpecIR
from forwardgen.core.engine.config_model import GeneratorConfig, load_config
from forwardgen.core.engine.integrity import IntegrityValidator
from forwardgen.core.engine.loader import load_spec
from forwardgen.core.engine.normalizer import normalize_ir
from forwardgen.core.engine.validate import validate_ir, validate_spec
from forwardgen.core.engine.validate_formatter import format_validation_result


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _require_spec(spec_file: str) -> Path:
    spec_path = Path(spec_file)
    if not spec_path.exists():
        print(f"❌ Error: Spec file not found: {spec_path}")
        sys.exit(1)
    return spec_path


def _report_exception(exc: Exception, debug: bool) -> None:
    print(f"❌ Error: {exc}")
    if debug:
        import traceback

        traceback.print_exc()
    sys.exit(1)


class ForwardgenCLI:
    """forwardgen - Forwarding accessor generator CLI"""

    def validate(self, spec_file: str, verbose: bool = False, debug: bool = False) -> None:
        """Validate spec file for correctness.

        Args:
            spec_file: Path to spec YAML/JSON file
            verbose: Show detailed validation results including successes
            debug: Enable debug output
        """
        _configure_logging(debug)
        spec_path = _require_spec(spec_file)

        try:
            print(f"📖 Loading and validating spec: {spec_path}")
            result = validate_spec(spec_path, normalize=True)
            print(format_validation_result(result, verbose=verbose))

            total_errors = sum(len(msgs) for msgs in result["errors"].values())
            if total_errors > 0:
                sys.exit(1)

        except Exception as e:
            _report_exception(e, debug)

    def gen(
        self,
        spec_file: str,
        output: str | None = None,
        config: str | None = None,
        overwrite: bool = False,
        debug: bool = False,
    ) -> None:
        """Generate the accessor module from spec file.

        Args:
            spec_file: Path to spec YAML/JSON file
            output: Output file (default: config output_file, "accessors.py")
            config: Path to generator config YAML
            overwrite: Overwrite an existing output file
            debug: Enable debug output
        """
        _configure_logging(debug)
        spec_path = _require_spec(spec_file)

        try:
            normalized = self._load_and_normalize_spec(spec_path)

            print("🔍 Validating IR...")
            errors = validate_ir(normalized)
            if errors:
                print(f"\n❌ Validation failed with {len(errors)} error(s):")
                for error in errors:
                    print(f"  - {error}")
                sys.exit(1)
            print("✅ Validation passed\n")

            generator_config = load_config(config) if config else GeneratorConfig()
            if overwrite:
                generator_config = generator_config.model_copy(update={"overwrite": True})

            output_path = Path(output) if output else Path(generator_config.output_file)
            print(f"🔨 Generating accessors: {output_path}")
            if not write_accessor_module(normalized, output_path, generator_config):
                print(f"  ⏭️  Skip (file exists): {output_path}")
                print("   Use --overwrite to regenerate.")
                return

            accessor_count = sum(len(spec.rules) for spec in normalized.forwards)
            print("\n✅ Accessor generation complete!")
            print(f"   {accessor_count} accessor(s) on {len(normalized.parents())} parent type(s)")
            print(f"   Generated file: {output_path}")

        except Exception as e:
            _report_exception(e, debug)

    def check(self, spec_file: str, debug: bool = False) -> None:
        """Check that referenced classes provide the forwarded fields and accessors.

        Args:
            spec_file: Path to spec YAML/JSON file
            debug: Enable debug output
        """
        _configure_logging(debug)
        spec_path = _require_spec(spec_file)

        try:
            normalized = self._load_and_normalize_spec(spec_path)

            # 仕様ファイルのディレクトリからの型参照を解決可能にする
            spec_dir = str(spec_path.parent.resolve())
            if spec_dir not in sys.path:
                sys.path.insert(0, spec_dir)

            print("🔍 Validating implementation integrity...")
            result = IntegrityValidator(normalized).validate_integrity()

            total_errors = sum(len(errors) for errors in result.values())
            if total_errors > 0:
                print(f"\n❌ Integrity validation failed with {total_errors} error(s)")
                for category, errors in result.items():
                    if errors:
                        print(f"\n  {category}:")
                        for error in errors:
                            print(f"    ⚠️  {error}")
                sys.exit(1)

            print("\n✅ All integrity checks passed")

        except Exception as e:
            _report_exception(e, debug)

    def version(self) -> None:
        """Show version information."""
        print(f"forwardgen {__version__}")

    def _load_and_normalize_spec(self, spec_path: Path) -> SpecIR:
        """Load and normalize spec file."""
        print(f"📖 Loading spec: {spec_path}")
        ir = load_spec(spec_path)
        print(f"✅ Loaded {len(ir.forwards)} forward definition(s)")

        print("🔄 Normalizing IR...")
        normalized = normalize_ir(ir)
        print("✅ Normalization complete")
        return normalized


def main() -> None:
    """forwardgen CLI entry point (called from python -m forwardgen)."""
    fire.Fire(ForwardgenCLI)


if __name__ == "__main__":
    main()
