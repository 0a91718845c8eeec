"""
Tests para config.py - Enums de estado y FormConfig.
"""

import pytest
from pydantic import ValidationError

from crudnav.config import Action, FormConfig, Mode


class TestEnums:
    """Tests para Action y Mode."""

    def test_navigation_actions(self):
        assert Action.PRIMEIRO.is_navigation
        assert Action.ULTIMO.is_navigation
        assert not Action.SALVAR.is_navigation
        assert not Action.ENCERRAR.is_navigation

    def test_action_from_string(self):
        assert Action("proximo") is Action.PROXIMO

    def test_dirty_modes(self):
        assert not Mode.BROWSE.is_dirty
        assert Mode.EDIT.is_dirty
        assert Mode.INSERT.is_dirty


class TestFormConfig:
    """Tests para FormConfig."""

    def test_defaults(self):
        config = FormConfig(primary_key="idgrupo")
        assert config.required_fields == []
        assert config.filters == ""

    def test_primary_key_required(self):
        with pytest.raises(ValidationError):
            FormConfig(primary_key="")

    def test_invalid_pattern(self):
        with pytest.raises(ValidationError):
            FormConfig(primary_key="id", view_field_pattern="(")

    def test_view_fields(self):
        """Columnas de exhibición de la vista."""
        config = FormConfig(primary_key="id")
        assert config.is_view_field("grupo_nome")
        assert config.is_view_field("categoria_descricao")
        assert config.is_view_field("estado_sigla")
        assert not config.is_view_field("nome")
        assert not config.is_view_field("idgrupo")

    def test_view_pattern_disabled(self):
        config = FormConfig(primary_key="id", view_field_pattern="")
        assert not config.is_view_field("grupo_nome")

    def test_filter_pairs(self):
        """Pares concretos; placeholders '*' se ignoran."""
        config = FormConfig(primary_key="id", filters="idgrupo = 3 AND idcategoria = *")
        assert config.filter_pairs() == {"idgrupo": "3"}

    def test_filter_pairs_empty(self):
        assert FormConfig(primary_key="id").filter_pairs() == {}

    def test_filter_pairs_malformed_chunk(self):
        config = FormConfig(primary_key="id", filters="idgrupo AND idcat = 7")
        assert config.filter_pairs() == {"idcat": "7"}
