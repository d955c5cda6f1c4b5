#!/usr/bin/env python3
"""
Check the configuration and that the indexer answers
"""

import asyncio
import sys


def check_imports():
    """Verify all modules import correctly"""
    print("🔍 Checking imports...")
    try:
        from nft_indexer import NFTService
        from nft_indexer.api.app import app
        print("  ✅ Service and API imported")
        return True
    except Exception as e:
        print(f"  ❌ Import failed: {e}")
        return False


def check_config():
    """Show which enrichment sources are configured"""
    print("\n📋 Configuration:")
    from nft_indexer.config import config

    print(f"  Indexer:      {config.indexer_url}")
    print(f"  IPFS gateway: {config.ipfs_gateway}")
    if config.ternoa_api_url:
        print(f"  ✅ Ternoa API:  {config.ternoa_api_url}")
    else:
        print("  ⚠️  Ternoa API not set (profiles and categories disabled)")
    print(f"  Timeout: {config.timeout}s, retries: {config.max_retries}, workers: {config.max_workers}")
    return True


async def check_indexer():
    """Fetch one page of one NFT"""
    print("\n🧪 Querying the indexer...")
    from nft_indexer import NFTService, NFTServiceError

    try:
        page = await NFTService().get_paginated_nfts(1, 1)
    except NFTServiceError as e:
        print(f"  ❌ {e} ({e.kind.value}): {e.__cause__!r}")
        return False

    print(f"  ✅ Indexer reachable, {page.total_count} NFTs in total")
    if page.data:
        nft = page.data[0]
        print(f"  📊 First NFT: {nft.id} - {nft.name or 'Unnamed'}")
    return True


def main():
    """Run all checks"""
    print("=" * 60)
    print("🚀 NFT INDEXER SETUP VERIFICATION")
    print("=" * 60)

    all_passed = check_imports() and check_config()
    if all_passed:
        all_passed = asyncio.run(check_indexer())

    print("\n" + "=" * 60)
    if all_passed:
        print("✅ ALL CHECKS PASSED")
        print("=" * 60)
        return 0
    print("⚠️  SOME CHECKS FAILED - Review output above")
    print("=" * 60)
    return 1


if __name__ == "__main__":
    sys.exit(main())
