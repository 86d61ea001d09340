from lazybundle.bundles import BundleWrapper, MappingBundleSource
from lazybundle.utils import field_summary


class Mock:
    def __init__(self):
        self.return_value = "test_getFieldSummary"

    @property
    def broken(self):
        raise RuntimeError("boom")


def test_field_summary_lists_values_and_failures():
    summary = field_summary(Mock(), "return_value", "nonExistent", "bad format", "broken")
    lines = summary.splitlines()

    assert lines[0] == "Mock"
    assert lines[1] == "  - return_value: test_getFieldSummary"
    assert lines[2] == "  - nonExistent: AttributeError"
    assert lines[3] == "  - bad format: AttributeError"
    assert lines[4] == "  - broken: RuntimeError"


def test_field_summary_of_bundle_wrapper():
    wrapper = BundleWrapper("app.Settings", MappingBundleSource())
    assert "  - name: app.Settings" in field_summary(wrapper, "name")
