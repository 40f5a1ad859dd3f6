#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify all database connections are working.
Usage: python scripts/test_connections.py
"""
import sys
sys.path.insert(0, '.')

from placement_portal.db.postgres import test_postgres_connection
from placement_portal.db.mongodb import test_mongo_connection
from placement_portal.services.llm_client import get_llm_client
from placement_portal.core.config import get_settings


def main():
    settings = get_settings()
    print("=" * 50)
    print("CAMPUS PLACEMENT PORTAL - CONNECTION TEST")
    print("=" * 50)

    print("\n[1] Testing PostgreSQL...")
    print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    print("    PostgreSQL: " + ("CONNECTED" if test_postgres_connection() else "FAILED"))

    print("\n[2] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db} (bucket: {settings.resume_bucket})")
    print("    MongoDB: " + ("CONNECTED" if test_mongo_connection() else "FAILED"))

    print("\n[3] Testing AI gateway...")
    if settings.llm_api_key:
        print(f"    Base URL: {settings.llm_base_url} (model: {settings.llm_model})")
        print("    AI gateway: " + ("CONNECTED" if get_llm_client().test_connection() else "FAILED"))
    else:
        print("    AI gateway: LLM_API_KEY not configured (skipped)")

    print("\n[4] Optional services...")
    print("    Judge0 key: " + ("set" if settings.judge0_api_key else "not set"))
    print("    PDF conversion key: " + ("set" if settings.pdfco_api_key else "not set"))

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
