#!/usr/bin/env python3
"""
Basic GitLab connector usage example.

Resolves the repository described by the GITLAB_* environment variables and
prints what was found. Run with: python examples/basic_usage.py
"""

import logging

from gitlab_connector import (
    ConnectionCache,
    ConnectionResolver,
    GitlabError,
    RepositoryDescriptor,
    configure_logging,
)

configure_logging(level=logging.INFO, cache_level=logging.DEBUG)

print("=== GitLab Connector Basic Usage Example ===\n")

# 1. Build the descriptor and the resolver
try:
    descriptor = RepositoryDescriptor.from_env()
    resolver = ConnectionResolver.from_env(cache=ConnectionCache())
except GitlabError as e:
    print(f"Configuration problem: {e}")
    raise SystemExit(1)

print(f"1. Resolving {descriptor.url} ...")

# 2. First lookup validates and caches
try:
    handle = resolver.get(descriptor)
except GitlabError as e:
    print(f"   Failed: {e} (code={e.code})")
    raise SystemExit(1)

print(f"   Host:    {handle.host}")
print(f"   Project: {handle.project.path_with_namespace} (id {handle.project.project_id})")
print(f"   Labels:  {', '.join(label.name for label in handle.mapper.labels) or '-'}")
print(f"   Milestones: {', '.join(m.title for m in handle.mapper.milestones) or '-'}")
print(f"   Members: {len(handle.mapper.members)}")

# 3. Second lookup is served from the cache
print("\n2. Resolving again ...")
assert resolver.get(descriptor) is handle
print("   Cache hit: OK")

# 4. Forced refresh replaces the cached connection
print("\n3. Forcing a refresh ...")
refreshed = resolver.get(descriptor, force_refresh=True)
print(f"   New handle: {refreshed is not handle}")

print("\n=== Done ===")
