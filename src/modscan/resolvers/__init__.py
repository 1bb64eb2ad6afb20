"""
Resolver registry: one resolver per supported architecture.
"""
from __future__ import annotations

from typing import Iterable, Iterator

from modscan.resolvers.base import BaseResolver
from modscan.resolvers.ppc import PPCBigEndianResolver
from modscan.resolvers.x64 import X64Resolver
from modscan.resolvers.x86 import X86Resolver
from modscan.signatures import ALL_ARCHS, Arch

# Default set, in collector order; can be extended by registering more
_REGISTRY: list[BaseResolver] = [
    X64Resolver(),
    X86Resolver(),
    PPCBigEndianResolver(),
]


def register_resolver(resolver: BaseResolver) -> None:
    """Add a resolver; it replaces any registered resolver for the same arch."""
    _REGISTRY[:] = [r for r in _REGISTRY if r.arch != resolver.arch]
    _REGISTRY.append(resolver)


def get_resolver(arch: Arch) -> BaseResolver | None:
    for r in _REGISTRY:
        if r.arch == arch:
            return r
    return None


def iter_resolvers(archs: Iterable[Arch] = ALL_ARCHS) -> Iterator[BaseResolver]:
    """Yield the resolvers for archs in scan order (x64, x86, ppc-be); unknown archs are skipped."""
    wanted = set(archs)
    for arch in ALL_ARCHS:
        if arch not in wanted:
            continue
        r = get_resolver(arch)
        if r is not None:
            yield r


__all__ = [
    "BaseResolver",
    "X64Resolver",
    "X86Resolver",
    "PPCBigEndianResolver",
    "register_resolver",
    "get_resolver",
    "iter_resolvers",
]
