"""
Capability markers (markers.py)
"""

import pytest

from autowire.markers import (
    PROVIDER,
    RESOURCE,
    Tag,
    has_tag,
    own_tags,
    path,
    provider,
    resource_path,
)


class TestTags:

    def test_provider_tag(self):
        @provider
        class Mapper:
            pass

        assert has_tag(Mapper, PROVIDER)
        assert own_tags(Mapper) == {"provider"}

    def test_path_tag_and_template(self):
        @path("/items/{id}")
        class ItemResource:
            pass

        assert has_tag(ItemResource, RESOURCE)
        assert resource_path(ItemResource) == "/items/{id}"

    def test_tags_accumulate(self):
        @provider
        @path("/both")
        class Both:
            pass

        assert own_tags(Both) == {"provider", "resource"}

    def test_own_tags_exclude_inherited(self):
        @provider
        class Base:
            pass

        class Child(Base):
            pass

        assert own_tags(Child) == frozenset()
        assert not has_tag(Child, PROVIDER)

    def test_untagged(self):
        class Plain:
            pass

        assert own_tags(Plain) == frozenset()
        assert resource_path(Plain) is None

    def test_custom_tag(self):
        audited = Tag("audited")

        @audited
        class Ledger:
            pass

        assert has_tag(Ledger, audited)
        assert repr(audited) == "Tag('audited')"

    def test_tag_rejects_functions(self):
        with pytest.raises(TypeError, match="only decorate classes"):
            provider(lambda: None)

    @pytest.mark.parametrize("template", ["", None])
    def test_path_requires_template(self, template):
        with pytest.raises(TypeError):
            path(template)
