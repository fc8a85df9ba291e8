# src/docmerge/core/merge/policy.py
"""
Matcher de políticas por context path.

Este módulo compila listas de patterns em conjuntos ordenados de regras
e responde, para um context path qualquer:

    - conflitos neste caminho são resolvidos por overwrite ou por append?
    - strings neste caminho devem ser resolvidas contra o diretório do
      documento de origem?

Patterns:
    - absoluto: prefixo `$.`, casa por igualdade exata com o context path
    - relativo: prefixo `.`, casa por sufixo do context path
    - sem prefixo: normalizado para absoluto (`foo` → `$.foo`)

Ordenação (fixa na construção, nunca reordenada):
    - patterns absolutos antes de relativos
    - dentro de cada grupo, ordem lexicográfica do pattern
    - a primeira regra que casa vence

Invariantes:
    - Nenhum pattern normalizado aparece com políticas diferentes
    - A política é imutável após construída
    - Conflitos de configuração são detectados antes de qualquer merge

Limites explícitos:
    - Não conhece semântica de chaves
    - Não indexa elementos de listas
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from .errors import PolicyConflictError


ABSOLUTE_PREFIX = "$."
RELATIVE_PREFIX = "."


def normalize_pattern(pattern: str) -> str:
    if pattern.startswith(RELATIVE_PREFIX) or pattern.startswith(ABSOLUTE_PREFIX):
        return pattern
    return ABSOLUTE_PREFIX + pattern


@dataclass(frozen=True)
class PolicyEntry:
    """Regra compilada: pattern normalizado e política resolvida."""

    pattern: str
    policy: bool
    is_relative: bool

    def matches(self, context_path: str) -> bool:
        if self.is_relative:
            return context_path.endswith(self.pattern)
        return context_path == self.pattern

    def sort_key(self) -> Tuple[bool, str]:
        return (self.is_relative, self.pattern)


@dataclass(frozen=True)
class PolicySet:
    """
    Conjunto ordenado e imutável de regras.

    Construído via `PolicySet.build`, que normaliza, deduplica, detecta
    conflitos e ordena as regras uma única vez.
    """

    entries: Tuple[PolicyEntry, ...] = ()

    @classmethod
    def build(cls, rules: Iterable[Tuple[str, bool]]) -> "PolicySet":
        """
        Compila pares (pattern, política) em um conjunto ordenado.

        Args:
            rules: pares (pattern bruto, política) na ordem declarada.

        Returns:
            PolicySet: regras absolutas antes das relativas, cada grupo em
            ordem lexicográfica.

        Raises:
            PolicyConflictError: se o mesmo pattern normalizado aparece com
            políticas diferentes.
        """
        compiled = {}
        for raw, policy in rules:
            pattern = normalize_pattern(raw)
            if pattern in compiled:
                if compiled[pattern].policy != policy:
                    raise PolicyConflictError(pattern)
                continue
            compiled[pattern] = PolicyEntry(
                pattern=pattern,
                policy=policy,
                is_relative=pattern.startswith(RELATIVE_PREFIX),
            )
        entries = sorted(compiled.values(), key=PolicyEntry.sort_key)
        return cls(entries=tuple(entries))

    def first_match(self, context_path: str) -> Optional[PolicyEntry]:
        for entry in self.entries:
            if entry.matches(context_path):
                return entry
        return None

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class MergePolicy:
    """
    Política completa de uma operação de merge.

    Agrupa o conjunto de resolução de conflitos (overwrite=True,
    append=False), o conjunto de resolução de caminhos e o default de
    overwrite usado quando nenhuma regra casa.
    """

    conflicts: PolicySet
    resolve_paths: PolicySet
    default_overwrite: bool = False

    @classmethod
    def build(
        cls,
        *,
        overwrite: Iterable[str] = (),
        append: Iterable[str] = (),
        resolve_path: Iterable[str] = (),
        default_overwrite: bool = False,
    ) -> "MergePolicy":
        rules = [(p, True) for p in overwrite] + [(p, False) for p in append]
        return cls(
            conflicts=PolicySet.build(rules),
            resolve_paths=PolicySet.build((p, True) for p in resolve_path),
            default_overwrite=default_overwrite,
        )

    @classmethod
    def from_options(cls, options: Any) -> "MergePolicy":
        return cls.build(
            overwrite=options.overwrite_patterns,
            append=options.append_patterns,
            resolve_path=options.resolve_path_patterns,
            default_overwrite=options.default_overwrite,
        )

    def is_overwrite(self, context_path: str) -> bool:
        entry = self.conflicts.first_match(context_path)
        if entry is None:
            return self.default_overwrite
        return entry.policy

    def resolve_path(self, context_path: str) -> bool:
        return self.resolve_paths.first_match(context_path) is not None
