# tests/core/merge/test_merger.py
"""
Testes do merger recursivo de documentos.

Este módulo valida a política de merge por tipo estrutural:
- união de chaves disjuntas
- idempotência para escalares iguais
- erro de chave duplicada sob append e substituição sob overwrite
- concatenação e substituição total de listas
- merge profundo de mapas
- detecção de conflitos estruturais independente da política

Limites explícitos:
    - Não valida carregamento de arquivos
    - Não valida resolução de caminhos
"""

import pytest

from docmerge.core.merge.errors import DuplicateKeyError, StructureMismatchError
from docmerge.core.merge.merger import DocumentMerger
from docmerge.core.merge.policy import MergePolicy


def _merge(*documents, **policy_kwargs):
    merger = DocumentMerger(MergePolicy.build(**policy_kwargs))
    for document in documents:
        merger.accumulate(document)
    return merger.root


def test_union_of_disjoint_keys():
    assert _merge({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}


@pytest.mark.parametrize("default_overwrite", [False, True])
def test_equal_scalars_are_idempotent(default_overwrite):
    assert _merge({"a": 1}, {"a": 1}, default_overwrite=default_overwrite) == {"a": 1}


def test_scalar_conflict_is_error_by_default():
    with pytest.raises(DuplicateKeyError) as excinfo:
        _merge({"a": 1}, {"a": 2})
    assert excinfo.value.context_path == "$.a"
    assert excinfo.value.details["existing"] == 1
    assert excinfo.value.details["incoming"] == 2


def test_scalar_overwrite_later_document_wins():
    assert _merge({"a": 1}, {"a": 2}, default_overwrite=True) == {"a": 2}


def test_scalars_of_different_types_are_not_equal():
    with pytest.raises(DuplicateKeyError):
        _merge({"a": 1}, {"a": True})
    with pytest.raises(DuplicateKeyError):
        _merge({"a": 1}, {"a": 1.0})


def test_sequence_default_concatenates_in_order():
    assert _merge({"list": [1, 2]}, {"list": [3]}) == {"list": [1, 2, 3]}


def test_sequence_overwrite_pattern_replaces_wholesale():
    assert _merge({"list": [1, 2]}, {"list": [3]}, overwrite=["$.list"]) == {"list": [3]}


def test_sequence_append_pattern_beats_default_overwrite():
    result = _merge(
        {"list": [1]}, {"list": [2]}, append=[".list"], default_overwrite=True
    )
    assert result == {"list": [1, 2]}


def test_sequence_concatenation_does_not_mutate_inputs():
    first = [1, 2]
    second = [3]
    result = _merge({"list": first}, {"list": second})
    assert result["list"] == [1, 2, 3]
    assert first == [1, 2]
    assert second == [3]


def test_policy_is_queried_with_the_key_path():
    """
    A política é consultada com o path da própria chave, não do mapa pai.
    Um pattern para `$.storage.files` afeta apenas a lista `files`.
    """
    result = _merge(
        {"storage": {"files": ["a"], "links": ["x"]}},
        {"storage": {"files": ["b"], "links": ["y"]}},
        overwrite=["$.storage.files"],
    )
    assert result == {"storage": {"files": ["b"], "links": ["x", "y"]}}


def test_nested_mappings_merge_deeply():
    result = _merge(
        {"engine": {"fail_fast": True, "log": {"level": "INFO"}}},
        {"engine": {"log": {"format": "json"}}, "steps": {"ingest": True}},
    )
    assert result == {
        "engine": {"fail_fast": True, "log": {"level": "INFO", "format": "json"}},
        "steps": {"ingest": True},
    }


def test_nested_scalar_conflict_reports_full_path():
    with pytest.raises(DuplicateKeyError) as excinfo:
        _merge({"storage": {"files": {"mode": 420}}}, {"storage": {"files": {"mode": 384}}})
    assert excinfo.value.context_path == "$.storage.files.mode"


def test_relative_overwrite_pattern_applies_at_any_depth():
    result = _merge(
        {"a": {"mode": 1}, "b": {"c": {"mode": 1}}},
        {"a": {"mode": 2}, "b": {"c": {"mode": 3}}},
        overwrite=[".mode"],
    )
    assert result == {"a": {"mode": 2}, "b": {"c": {"mode": 3}}}


def test_absent_mapping_is_copied_not_aliased():
    src = {"m": {"x": 1}}
    merger = DocumentMerger(MergePolicy.build())
    merger.accumulate({"other": True})
    merger.accumulate(src)
    merger.root["m"]["y"] = 2
    assert src == {"m": {"x": 1}}


@pytest.mark.parametrize("default_overwrite", [False, True])
def test_sequence_vs_mapping_is_structure_mismatch(default_overwrite):
    with pytest.raises(StructureMismatchError) as excinfo:
        _merge({"a": [1]}, {"a": {"b": 1}}, default_overwrite=default_overwrite)
    assert excinfo.value.context_path == "$.a"
    assert excinfo.value.details["src_kind"] == "mapping"
    assert excinfo.value.details["dst_kind"] == "sequence"


@pytest.mark.parametrize("default_overwrite", [False, True])
def test_mapping_vs_sequence_is_structure_mismatch(default_overwrite):
    with pytest.raises(StructureMismatchError) as excinfo:
        _merge({"a": {"b": 1}}, {"a": [1]}, default_overwrite=default_overwrite)
    assert excinfo.value.details["src_kind"] == "sequence"
    assert excinfo.value.details["dst_kind"] == "mapping"


def test_sequence_over_scalar_is_structure_mismatch():
    with pytest.raises(StructureMismatchError) as excinfo:
        _merge({"a": "x"}, {"a": ["x"]}, default_overwrite=True)
    assert excinfo.value.details["dst_kind"] == "scalar"


def test_mapping_over_scalar_is_structure_mismatch():
    with pytest.raises(StructureMismatchError):
        _merge({"a": None}, {"a": {"b": 1}}, default_overwrite=True)


def test_scalar_over_mapping_follows_scalar_policy():
    with pytest.raises(DuplicateKeyError):
        _merge({"a": {"b": 1}}, {"a": "flat"})
    assert _merge({"a": {"b": 1}}, {"a": "flat"}, default_overwrite=True) == {"a": "flat"}


def test_first_document_becomes_root_unmodified():
    first = {"a": [1], "b": {"c": 2}}
    merger = DocumentMerger(MergePolicy.build())
    assert merger.accumulate(first) is first
    assert merger.root is first


def test_order_sensitivity():
    """
    O merge processa documentos estritamente na ordem fornecida.

    Sob overwrite, um escalar pode substituir um mapa, mas um mapa nunca
    se mescla sobre um escalar: [A, B] funciona e [B, A] falha.
    """
    a = {"a": {"b": 1}, "list": [1]}
    b = {"a": "flat", "list": [2]}

    assert _merge(dict(a), dict(b), default_overwrite=False, append=[".list"], overwrite=["$.a"]) == {
        "a": "flat",
        "list": [1, 2],
    }
    with pytest.raises(StructureMismatchError):
        _merge(dict(b), dict(a), append=[".list"], overwrite=["$.a"])


def test_sequence_concatenation_follows_document_order():
    assert _merge({"l": [1]}, {"l": [2]}, {"l": [3]}) == {"l": [1, 2, 3]}
    assert _merge({"l": [3]}, {"l": [2]}, {"l": [1]}) == {"l": [3, 2, 1]}


def test_merge_is_not_transactional():
    dst = {"a": 1}
    merger = DocumentMerger(MergePolicy.build())
    merger.accumulate(dst)
    with pytest.raises(DuplicateKeyError):
        merger.accumulate({"b": 2, "a": 3})
    assert dst == {"a": 1, "b": 2}


def test_merge_events_are_logged(merge_context):
    merger = DocumentMerger(MergePolicy.build(default_overwrite=True), merge_context)
    merger.accumulate({"a": 1, "l": [1]})
    merger.accumulate({"a": 2, "l": [2]})
    messages = [e["message"] for e in merge_context.events_for("merge")]
    assert "Overwrite[$.a] 1 -> 2" in messages
    assert "Overwrite[$.l] sequence" in messages
