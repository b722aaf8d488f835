"""Tests for the in-memory page collaborators."""

from playground_share.models import (
    ExtendsProjectConfig,
    ProjectFile,
    SourceProjectConfig,
)
from playground_share.share.collaborators import (
    CodeLanguagePreference,
    InMemoryEditor,
    Location,
    SampleNavigation,
)


class TestLocation:
    def test_hash(self):
        assert Location("https://x.dev/p/#gist=a").hash == "#gist=a"
        assert Location("https://x.dev/p/").hash == ""
        assert Location("https://x.dev/p/#").hash == ""

    def test_navigate_notifies_on_fragment_change(self):
        location = Location("https://x.dev/p/")
        calls = []
        location.subscribe(lambda: calls.append(location.hash))

        location.navigate("https://x.dev/p/#gist=a")
        location.navigate("https://x.dev/p/#gist=a")
        location.set_hash("#sample=b")

        assert calls == ["#gist=a", "#sample=b"]
        assert location.href == "https://x.dev/p/#sample=b"

    def test_unsubscribe(self):
        location = Location()
        calls = []
        unsubscribe = location.subscribe(lambda: calls.append(1))
        unsubscribe()
        unsubscribe()

        location.set_hash("gist=a")

        assert calls == []


class TestCodeLanguagePreference:
    def test_notifies_only_on_change(self):
        preference = CodeLanguagePreference()
        calls = []
        preference.subscribe(lambda: calls.append(preference.value))

        preference.set("ts")
        preference.set("js")

        assert calls == ["js"]


class TestInMemoryEditor:
    def test_extends_config_sets_files(self):
        editor = InMemoryEditor()
        files = [ProjectFile(name="a.ts", content="a", hidden=True)]

        editor.set_config(ExtendsProjectConfig.from_files("/base.json", files))

        assert editor.files == files
        assert editor.config.extends == "/base.json"

    def test_source_config_clears_files(self):
        editor = InMemoryEditor([ProjectFile(name="a.ts", content="a")])

        editor.set_config(SourceProjectConfig(project_src="/s/project.json"))

        assert editor.files == []
        assert editor.config.to_dict() == {"projectSrc": "/s/project.json"}


class TestSampleNavigation:
    def test_highlight(self):
        nav = SampleNavigation(["a", "b"])
        assert nav.highlight("b")
        assert nav.active == "b"
        assert not nav.highlight("zzz")
        nav.clear_highlight()
        assert nav.active is None

    def test_visible_entry_does_not_scroll(self):
        nav = SampleNavigation(["a", "b", "c"], item_height=10, viewport_height=100)
        nav.scroll_to_center("c")
        assert nav.scroll_top == 0

    def test_hidden_entry_is_centered(self):
        samples = [str(i) for i in range(100)]
        nav = SampleNavigation(samples, item_height=10, viewport_height=100)

        nav.scroll_to_center("50")

        assert nav.scroll_top == 500 + 5 - 50

    def test_scroll_is_clamped_at_end(self):
        samples = [str(i) for i in range(100)]
        nav = SampleNavigation(samples, item_height=10, viewport_height=100)

        nav.scroll_to_center("99")

        assert nav.scroll_top == 900
