# src/docmerge/core/merge/tree.py
"""
Modelo de dados da árvore de documento.

Um documento é representado por valores Python puros, exatamente como
produzidos pelo parser YAML:

    - dict  → Mapping (chave → valor)
    - list  → Sequence (valores ordenados)
    - resto → Scalar (str, int, float, bool, None, datas, ...)

`NodeKind` fecha essa união em três variantes, e `node_kind` é o único
ponto de classificação usado pelo resolver e pelo merger.

Context paths começam em `$` e são estendidos com `.` + chave a cada
descida em um mapa. Elementos de uma lista compartilham o path da chave
que contém a lista.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


ROOT_PATH = "$"


class NodeKind(str, Enum):
    """Variante estrutural de um nó da árvore de documento."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def node_kind(value: Any) -> NodeKind:
    if isinstance(value, dict):
        return NodeKind.MAPPING
    if isinstance(value, list):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def child_path(parent: str, key: Any) -> str:
    return f"{parent}.{key}"


def scalars_equal(a: Any, b: Any) -> bool:
    """
    Igualdade profunda entre escalares.

    Exige o mesmo tipo Python além de `==`, de forma que `1`, `1.0` e
    `True` são valores distintos, como o decoder YAML os diferencia.
    """
    return type(a) is type(b) and a == b


def unalias(value: Any, _ancestors: frozenset = frozenset()) -> Any:
    """
    Copia a árvore de forma que nenhum mapa ou lista seja compartilhado.

    O parser YAML devolve o mesmo objeto para uma âncora e todos os seus
    aliases; como resolver e merger mutam in-place, cada ocorrência precisa
    ser um objeto próprio. Diferente de `copy.deepcopy`, que preserva o
    compartilhamento via memo.

    Raises:
        ValueError: se um alias referencia um de seus próprios ancestrais.
    """
    kind = node_kind(value)
    if kind is NodeKind.SCALAR:
        return value
    if id(value) in _ancestors:
        raise ValueError("recursive alias in document")
    ancestors = _ancestors | {id(value)}
    if kind is NodeKind.MAPPING:
        return {k: unalias(v, ancestors) for k, v in value.items()}
    return [unalias(v, ancestors) for v in value]
