#!/usr/bin/env python3
"""
Environment and Provider Diagnostics Script

This script prints the runtime configuration for the LLM provider.
Use this to verify that:
1. LLM provider is Anthropic (via LlamaIndex)
2. Generation settings match what the scoring prompt expects
3. The provider class can actually be imported

The API key is not part of the environment: it is supplied by the caller
with every analysis request.

Usage:
    cd apps/backend
    python scripts/inspect_env.py
"""

import os
import sys

# Add the backend package to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from resume_evaluator.core.config import Settings, settings  # noqa: E402

ANTHROPIC_PROVIDER = "llama_index.llms.anthropic.Anthropic"


def check_settings(config: Settings) -> tuple[list[str], list[str]]:
    """Return (errors, warnings) for the given settings."""
    errors = []
    warnings = []

    if config.LLM_PROVIDER == ANTHROPIC_PROVIDER:
        pass
    elif config.LLM_PROVIDER and "anthropic" in config.LLM_PROVIDER.lower():
        warnings.append(f"LLM_PROVIDER should be '{ANTHROPIC_PROVIDER}', got: {config.LLM_PROVIDER}")
    else:
        errors.append(f"LLM_PROVIDER must be '{ANTHROPIC_PROVIDER}', got: {config.LLM_PROVIDER}")

    if config.LLM_MAX_TOKENS < 2000:
        warnings.append(f"LLM_MAX_TOKENS={config.LLM_MAX_TOKENS} is low and may truncate the evaluation, recommend 4000")

    if config.LLM_TEMPERATURE > 0.5:
        warnings.append(f"LLM_TEMPERATURE={config.LLM_TEMPERATURE} makes scores less consistent, recommend 0.3")

    if config.LLM_TIMEOUT_SECONDS <= 0:
        errors.append(f"LLM_TIMEOUT_SECONDS must be positive, got: {config.LLM_TIMEOUT_SECONDS}")

    if config.RESUME_MIN_BYTES >= config.RESUME_MAX_BYTES:
        errors.append("RESUME_MIN_BYTES must be smaller than RESUME_MAX_BYTES")

    return errors, warnings


def main():
    print("=" * 60)
    print("Resume Evaluator Provider Diagnostics")
    print("=" * 60)

    print("\n🤖 LLM Configuration:")
    print(f"  LLM_PROVIDER:        {settings.LLM_PROVIDER}")
    print(f"  LL_MODEL:            {settings.LL_MODEL}")
    print(f"  LLM_MAX_TOKENS:      {settings.LLM_MAX_TOKENS}")
    print(f"  LLM_TEMPERATURE:     {settings.LLM_TEMPERATURE}")
    print(f"  LLM_TIMEOUT_SECONDS: {settings.LLM_TIMEOUT_SECONDS}")
    print(f"  LLM_BASE_URL:        {settings.LLM_BASE_URL or '(not set)'}")
    print(f"  LLM_API_KEY_PREFIX:  {settings.LLM_API_KEY_PREFIX}")

    errors, warnings = check_settings(settings)

    print("\n🔧 RUNTIME IMPORT TEST")
    print("-" * 40)
    try:
        from resume_evaluator.agent.providers.llama_index import _get_real_provider

        provider_cls, _, classname = _get_real_provider(settings.LLM_PROVIDER)
        print(f"✅ Provider class importable: {classname}")
    except Exception as e:
        print(f"❌ Failed to import provider: {e}")
        errors.append(f"Provider import failed: {e}")

    print("\n" + "=" * 60)
    if errors:
        print("❌ ERRORS FOUND:")
        for err in errors:
            print(f"   • {err}")
        print("\nFix these issues before running the application.")
        sys.exit(1)
    elif warnings:
        print("⚠️  WARNINGS (non-critical):")
        for warn in warnings:
            print(f"   • {warn}")
        print("\n✅ System should work, but consider addressing warnings.")
        sys.exit(0)
    else:
        print("✅ ALL CHECKS PASSED")
        sys.exit(0)


if __name__ == "__main__":
    main()
