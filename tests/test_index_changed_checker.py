"""
Tests for index configuration drift detection.
"""

import copy

import pytest

from elasticsearch_explorer import IndexChangedChecker, IndexConfiguration, InvalidArgumentError
from elasticsearch_explorer.index_management import ConfigurationComparator

INDEX_NAME = "test"


SAME_INDICES = {
    "empty case": ({}, {}, {}, {}),
    "full": (
        {"id": {"type": "keyword"}},
        {"index": {"max_ngram_diff": "2"}, "tokenizer": {"sample": "path_hierarchy"}},
        {"id": {"type": "keyword"}},
        {"index": {"max_ngram_diff": "2"}, "tokenizer": {"sample": "path_hierarchy"}},
    ),
    "ignores unknown settings": ({}, {"unknown": True}, {}, {"unknown": False}),
    "ignores unmanaged index settings": (
        {},
        {"index": {"max_ngram_diff": "2"}},
        {},
        {"index": {"max_ngram_diff": "2", "uuid": "x1y2", "creation_date": "1700000000000"}},
    ),
    "stopword order does not matter": (
        {},
        {"analysis": {"filter": {"my-stop": {"type": "stop", "stopwords": ["a", "b"]}}}},
        {},
        {"analysis": {"filter": {"my-stop": {"type": "stop", "stopwords": ["b", "a"]}}}},
    ),
    "key order does not matter": (
        {"id": {"type": "keyword", "index": False}},
        {},
        {"id": {"index": False, "type": "keyword"}},
        {},
    ),
    "repeated stopword does not matter": (
        {},
        {"analysis": {"filter": {"my-stop": {"type": "stop", "stopwords": ["a", "b"]}}}},
        {},
        {"analysis": {"filter": {"my-stop": {"type": "stop", "stopwords": ["b", "a", "a"]}}}},
    ),
}


DIFFERENT_INDICES = {
    "added stopword": (
        {},
        {"analysis": {"filter": {"my-stop": {"type": "stop", "stopwords": ["a", "b"]}}}},
        {},
        {"analysis": {"filter": {"my-stop": {"type": "stop", "stopwords": ["a", "b", "c"]}}}},
    ),
    "empty different settings": ({}, {"index": {"max_ngram_diff": "2"}}, {}, {}),
    "empty different mapping": ({"id": {"type": "keyword"}}, {}, {}, {}),
    "full different tokenizer": (
        {"id": {"type": "keyword"}},
        {"index": {"max_ngram_diff": "2"}, "tokenizer": {"sample": "simple"}},
        {"id": {"type": "keyword"}},
        {"index": {"max_ngram_diff": "2"}, "tokenizer": {"sample": "path_hierarchy"}},
    ),
    "different mapping field": (
        {"id": {"type": "keyword", "fields": {"text": {"type": "text"}}}},
        {},
        {"id": {"type": "keyword"}},
        {},
    ),
    "different mapping type": ({"id": {"type": "integer"}}, {}, {"id": {"type": "keyword"}}, {}),
    "missing mapping": (
        {"id": {"type": "keyword"}, "name": {"type": "keyword"}},
        {},
        {"id": {"type": "keyword"}},
        {},
    ),
    "new mapping": (
        {"id": {"type": "keyword"}},
        {},
        {"id": {"type": "keyword"}, "name": {"type": "keyword"}},
        {},
    ),
    "validate invalid type": ({"id": {"type": "keyword"}}, {}, {"id": "str"}, {}),
    "different analyzer": (
        {},
        {"analysis": {"analyzer": {"my_english_analyzer": {"type": "standard", "stopwords": "_english_"}}}},
        {},
        {"analysis": {"analyzer": {}}},
    ),
    "different analysis properties": (
        {},
        {
            "analysis": {
                "analyzer": {"c": {"type": "custom", "filters": ["my-stop"]}},
                "filters": {"my-stop": {"type": "stop", "stopwords": ["a"]}},
            }
        },
        {},
        {
            "analysis": {
                "analyzer": {"c": {"type": "custom", "filters": ["my-stop"]}},
                "filters": {"my-stop": {"type": "stop", "stopwords": ["a", "b"]}},
            }
        },
    ),
    "prevent type juggling": ({}, {"index": {"max_ngram_diff": "2"}}, {}, {"index": {"max_ngram_diff": 2}}),
    "prevent type juggling in nested properties": (
        {"id": {"type": "keyword", "fields": {"text": {"type": False}}}},
        {},
        {"id": {"type": "keyword", "fields": {"text": {"type": 0}}}},
        {},
    ),
    "integer is not float": ({"rank": {"type": "rank_feature", "boost": 1}}, {}, {"rank": {"type": "rank_feature", "boost": 1.0}}, {}),
    "nested sub field changed deep down": (
        {"title": {"type": "text", "fields": {"raw": {"type": "keyword", "fields": {"lc": {"type": "keyword"}}}}}},
        {},
        {"title": {"type": "text", "fields": {"raw": {"type": "keyword", "fields": {"lc": {"type": "text"}}}}}},
        {},
    ),
}


@pytest.fixture
def checker(mock_index_adapter):
    return IndexChangedChecker(mock_index_adapter)


def test_it_detects_changes_on_non_existing_index(checker, mock_index_adapter):
    target = IndexConfiguration.create(INDEX_NAME, {}, {})
    mock_index_adapter.get_remote_configuration.return_value = None

    assert checker.has_changes(target) is True
    mock_index_adapter.get_remote_configuration.assert_called_once_with(target)


@pytest.mark.parametrize(
    "target_mapping, target_settings, actual_mapping, actual_settings",
    list(SAME_INDICES.values()),
    ids=list(SAME_INDICES.keys()),
)
def test_it_works_for_same_indices(
    checker, mock_index_adapter, target_mapping, target_settings, actual_mapping, actual_settings
):
    target = IndexConfiguration.create(INDEX_NAME, target_mapping, target_settings)
    actual = IndexConfiguration.create(INDEX_NAME, actual_mapping, actual_settings)
    mock_index_adapter.get_remote_configuration.return_value = actual

    assert checker.has_changes(target) is False
    mock_index_adapter.get_remote_configuration.assert_called_once_with(target)


@pytest.mark.parametrize(
    "target_mapping, target_settings, actual_mapping, actual_settings",
    list(DIFFERENT_INDICES.values()),
    ids=list(DIFFERENT_INDICES.keys()),
)
def test_it_detects_changes(
    checker, mock_index_adapter, target_mapping, target_settings, actual_mapping, actual_settings
):
    target = IndexConfiguration.create(INDEX_NAME, target_mapping, target_settings)
    actual = IndexConfiguration.create(INDEX_NAME, actual_mapping, actual_settings)
    mock_index_adapter.get_remote_configuration.return_value = actual

    assert checker.has_changes(target) is True


@pytest.mark.parametrize(
    "mapping, settings",
    [(case[0], case[1]) for case in list(SAME_INDICES.values()) + list(DIFFERENT_INDICES.values())],
)
def test_configuration_equals_its_deep_copy(checker, mock_index_adapter, mapping, settings):
    target = IndexConfiguration.create(INDEX_NAME, mapping, settings)
    mock_index_adapter.get_remote_configuration.return_value = copy.deepcopy(target)

    assert checker.has_changes(target) is False


def test_comparison_across_indices_is_refused(checker, mock_index_adapter):
    mock_index_adapter.get_remote_configuration.return_value = IndexConfiguration.create("other")

    with pytest.raises(InvalidArgumentError):
        checker.has_changes(IndexConfiguration.create(INDEX_NAME))


class TestConfigurationComparator:

    def test_differences_name_the_changed_paths(self):
        comparator = ConfigurationComparator()
        desired = IndexConfiguration.create(
            INDEX_NAME,
            {"id": {"type": "keyword"}, "title": {"type": "text"}},
            {"index": {"max_ngram_diff": "2"}, "unknown": 1},
        )
        actual = IndexConfiguration.create(
            INDEX_NAME,
            {"id": {"type": "integer"}},
            {"index": {"max_ngram_diff": 2}, "unknown": 2},
        )

        assert comparator.differences(desired, actual) == [
            "mapping.id.type",
            "mapping.title",
            "settings.index.max_ngram_diff",
        ]

    def test_custom_managed_settings(self):
        comparator = ConfigurationComparator(managed_settings=["index.number_of_replicas"])
        desired = IndexConfiguration.create(INDEX_NAME, {}, {"index": {"number_of_replicas": "1"}})
        actual = IndexConfiguration.create(INDEX_NAME, {}, {"index": {"number_of_replicas": "2"}})

        assert comparator.has_differences(desired, actual) is True

    def test_lists_compare_as_sets(self):
        comparator = ConfigurationComparator()

        assert comparator.equal(["a", "b"], ["b", "a", "a"]) is True
        assert comparator.equal(["a", "a", "b"], ["a", "b", "b"]) is True
        assert comparator.equal(["a", "b"], ["a", "b", "c"]) is False
        assert comparator.equal(["a", "b", "c"], ["a", "b"]) is False
        assert comparator.equal(["a"], []) is False
        assert comparator.equal([], []) is True

    def test_list_elements_match_type_strict(self):
        comparator = ConfigurationComparator()

        assert comparator.equal([1, 1.0], [1]) is False
        assert comparator.equal(["2"], [2]) is False

    def test_lists_of_documents(self):
        comparator = ConfigurationComparator()

        assert comparator.equal([{"a": 1}, {"b": [2, 3]}], [{"b": [3, 2]}, {"a": 1}]) is True
        assert comparator.equal([{"a": 1}], [{"a": True}]) is False
