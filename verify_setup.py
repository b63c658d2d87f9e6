"""
Setup verification script for the CHSI assistant backend.
Checks all dependencies and services are properly configured.
"""
import asyncio
import sys
import os
from typing import List, Tuple

# Color codes for terminal output
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
RESET = "\033[0m"


def print_status(message: str, status: bool):
    """Print colored status message."""
    symbol = f"{GREEN}✓{RESET}" if status else f"{RED}✗{RESET}"
    print(f"{symbol} {message}")


async def check_python_version() -> bool:
    """Check Python version is 3.11+."""
    version = sys.version_info
    if version.major == 3 and version.minor >= 11:
        print_status(f"Python version: {version.major}.{version.minor}.{version.micro}", True)
        return True
    else:
        print_status(f"Python version {version.major}.{version.minor} (requires 3.11+)", False)
        return False


async def check_dependencies() -> bool:
    """Check if required packages are installed."""
    required_packages = [
        "fastapi",
        "uvicorn",
        "sqlalchemy",
        "asyncpg",
        "alembic",
        "httpx",
        "pydantic_settings",
        "docx",
    ]

    all_installed = True
    for package in required_packages:
        try:
            __import__(package)
            print_status(f"Package '{package}' installed", True)
        except ImportError:
            print_status(f"Package '{package}' missing", False)
            all_installed = False

    return all_installed


async def check_env_file() -> bool:
    """Check if .env file exists."""
    if os.path.exists(".env"):
        print_status(".env file exists", True)
        return True
    else:
        print_status(".env file missing (defaults from chsi/config.py will be used)", False)
        return False


async def check_document_rendering() -> bool:
    """Render every document type once with an empty data record."""
    try:
        from chsi.services.document_generator import generate
        from chsi.services.document_model import DocumentType

        for document_type in DocumentType:
            blob = generate(document_type, {})
            print_status(f"Rendered '{document_type.value}' ({len(blob)} bytes)", True)
        return True

    except Exception as e:
        print_status(f"Document rendering failed: {str(e)}", False)
        return False


async def check_ollama() -> bool:
    """Check if Ollama is running and has the chat model."""
    try:
        import httpx
        from chsi.config import settings

        async with httpx.AsyncClient(timeout=5.0) as client:
            response = await client.get(f"{settings.OLLAMA_BASE_URL}/api/tags")

            if response.status_code == 200:
                print_status("Ollama service is running", True)

                models = response.json().get("models", [])
                model_names = [m["name"] for m in models]

                llm_model = settings.OLLAMA_LLM_MODEL
                has_llm = any(llm_model.split(":")[0] in name for name in model_names)

                print_status(f"LLM model ({llm_model}): {'Found' if has_llm else 'Missing'}", has_llm)

                return has_llm
            else:
                print_status(f"Ollama service error (status {response.status_code})", False)
                return False

    except Exception as e:
        print_status(f"Ollama connection failed: {str(e)}", False)
        print(f"  {YELLOW}Make sure Ollama is installed and running{RESET}")
        print(f"  {YELLOW}Install from: https://ollama.ai/{RESET}")
        return False


async def check_postgres() -> bool:
    """Check if PostgreSQL is running."""
    try:
        import asyncpg
        from chsi.config import settings

        conn = await asyncpg.connect(
            settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://"),
            timeout=5
        )
        await conn.fetchval("SELECT 1")
        await conn.close()

        print_status("PostgreSQL connection successful", True)
        return True

    except Exception as e:
        print_status(f"PostgreSQL connection failed: {str(e)}", False)
        print(f"  {YELLOW}Run: docker-compose up -d{RESET}")
        return False


async def main():
    """Run all verification checks."""
    print(f"\n{BLUE}{'='*60}{RESET}")
    print(f"{BLUE}CHSI Assistant Backend - Setup Verification{RESET}")
    print(f"{BLUE}{'='*60}{RESET}\n")

    checks: List[Tuple[str, callable]] = [
        ("Python Version", check_python_version),
        ("Dependencies", check_dependencies),
        ("Environment File", check_env_file),
        ("Document Rendering", check_document_rendering),
        ("PostgreSQL", check_postgres),
        ("Ollama + Model", check_ollama),
    ]

    results = []

    for check_name, check_func in checks:
        print(f"\n{BLUE}Checking {check_name}...{RESET}")
        try:
            result = await check_func()
            results.append(result)
        except Exception as e:
            print_status(f"Error during check: {str(e)}", False)
            results.append(False)

    # Summary
    print(f"\n{BLUE}{'='*60}{RESET}")
    passed = sum(results)
    total = len(results)

    if passed == total:
        print(f"{GREEN}✓ All checks passed! ({passed}/{total}){RESET}")
        print(f"\n{GREEN}You're ready to run the backend:{RESET}")
        print(f"  uvicorn chsi.main:app --reload")
    else:
        print(f"{RED}✗ Some checks failed ({passed}/{total} passed){RESET}")
        print(f"\n{YELLOW}Please fix the issues above before running the backend.{RESET}")
        sys.exit(1)

    print(f"{BLUE}{'='*60}{RESET}\n")


if __name__ == "__main__":
    asyncio.run(main())
