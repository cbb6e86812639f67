"""
Tests for connection settings and XML index declarations.
"""

import pytest

from elasticsearch_explorer.config import ConfigLoader, ElasticsearchSettings
from elasticsearch_explorer.exceptions import ConfigurationError, IndexNotDeclaredError


def write_config(tmp_path, body: str) -> str:
    path = tmp_path / "indices.xml"
    path.write_text(f'<?xml version="1.0" encoding="UTF-8"?>\n<explorer>{body}</explorer>')
    return str(path)


class TestConfigLoader:
    """Parsing of index declarations."""

    def test_bundled_configuration(self):
        loader = ConfigLoader()

        assert loader.get_declared_indices() == ["posts", "authors"]

        posts = loader.get_declaration("posts")
        assert posts.name == "posts"
        assert posts.default_search_fields == ["title", "body"]
        assert posts.configuration.mapping["title"] == {
            "type": "text",
            "analyzer": "english_stop",
            "fields": {"raw": {"type": "keyword"}},
        }
        assert posts.configuration.mapping["comments"]["properties"]["status"] == {"type": "keyword"}
        assert posts.configuration.settings["index"] == {"max_ngram_diff": "2"}
        assert posts.configuration.settings["analysis"]["analyzer"]["english_stop"]["filter"] == [
            "lowercase",
            "english_stopwords",
        ]

    def test_typed_setting_values(self, tmp_path):
        path = write_config(tmp_path, """
            <indices>
              <index name="t">
                <settings>
                  <index>
                    <max_ngram_diff type="int">3</max_ngram_diff>
                    <enabled type="bool">false</enabled>
                    <ratio type="float">0.5</ratio>
                    <label>3</label>
                  </index>
                </settings>
              </index>
            </indices>
        """)

        settings = ConfigLoader(path).get_index_configuration("t").settings

        assert settings == {"index": {"max_ngram_diff": 3, "enabled": False, "ratio": 0.5, "label": "3"}}

    def test_mapping_attributes_are_typed(self, tmp_path):
        path = write_config(tmp_path, """
            <indices>
              <index name="t">
                <mapping>
                  <field name="tag" type="keyword" ignore_above="256" index="false" doc_values="true"/>
                  <field name="code" type="keyword" null_value="n/a"/>
                </mapping>
              </index>
            </indices>
        """)

        mapping = ConfigLoader(path).get_index_configuration("t").mapping

        assert mapping == {
            "tag": {"type": "keyword", "ignore_above": 256, "index": False, "doc_values": True},
            "code": {"type": "keyword", "null_value": "n/a"},
        }

    def test_index_without_mapping_or_settings(self, tmp_path):
        path = write_config(tmp_path, '<indices><index name="bare"><settings/></index></indices>')

        configuration = ConfigLoader(path).get_index_configuration("bare")

        assert configuration.mapping == {}
        assert configuration.settings == {}

    def test_unknown_index(self):
        with pytest.raises(IndexNotDeclaredError) as exc_info:
            ConfigLoader().get_declaration("missing")

        assert exc_info.value.available_indices == ["posts", "authors"]

    def test_not_declared_error_without_alternatives(self):
        error = IndexNotDeclaredError("missing")

        assert error.available_indices == []
        assert str(error) == "Index 'missing' is not declared"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigLoader(str(tmp_path / "nope.xml")).load()

    def test_invalid_xml(self, tmp_path):
        path = tmp_path / "broken.xml"
        path.write_text("<explorer><indices>")

        with pytest.raises(ConfigurationError):
            ConfigLoader(str(path)).load()

    def test_no_indices(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigLoader(write_config(tmp_path, "<indices/>")).load()

    def test_bad_typed_value(self, tmp_path):
        path = write_config(tmp_path, """
            <indices><index name="t"><settings><index>
              <max_ngram_diff type="int">two</max_ngram_diff>
            </index></settings></index></indices>
        """)

        with pytest.raises(ConfigurationError):
            ConfigLoader(path).load()

    def test_is_index_declared(self):
        loader = ConfigLoader()

        assert loader.is_index_declared("authors") is True
        assert loader.is_index_declared("comments") is False


class TestElasticsearchSettings:
    """Settings from environment variables."""

    def test_defaults(self, monkeypatch):
        for name in ("ES_HOST", "ES_PORT", "ES_SCHEME", "ES_REQUEST_TIMEOUT",
                     "ES_MAX_RETRIES", "EXPLORER_INDEX_CONFIG", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr("elasticsearch_explorer.config.settings.load_dotenv", lambda: False)

        settings = ElasticsearchSettings.from_env()

        assert settings.url == "http://localhost:9200"
        assert settings.request_timeout == 30
        assert settings.max_retries == 3
        assert settings.index_config_path is None

    def test_from_environment(self, monkeypatch):
        monkeypatch.setattr("elasticsearch_explorer.config.settings.load_dotenv", lambda: False)
        monkeypatch.setenv("ES_HOST", "search.internal")
        monkeypatch.setenv("ES_PORT", "9243")
        monkeypatch.setenv("ES_SCHEME", "https")
        monkeypatch.setenv("EXPLORER_INDEX_CONFIG", "/etc/explorer/indices.xml")

        settings = ElasticsearchSettings.from_env()

        assert settings.url == "https://search.internal:9243"
        assert settings.index_config_path == "/etc/explorer/indices.xml"

    def test_invalid_port(self, monkeypatch):
        monkeypatch.setattr("elasticsearch_explorer.config.settings.load_dotenv", lambda: False)
        monkeypatch.setenv("ES_PORT", "ninety-two hundred")

        with pytest.raises(ConfigurationError):
            ElasticsearchSettings.from_env()
