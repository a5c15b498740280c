import unittest

from _test_support import codes, x_listener

from flowlint import FlowLinter, LintOptions
from flowlint.lint import parse_version_spec


class VersionSyntaxTests(unittest.TestCase):
    def test_accepted_forms(self):
        for raw, kind in (
            ("1.2.3", "exact"),
            ("1.2.3+build.7", "exact"),
            ("latest", "latest"),
            ("^1.0.0", "caret"),
            ("~2.1.0", "tilde"),
            (">=1.0.0", "comparison"),
            ("<3.0.0", "comparison"),
        ):
            spec = parse_version_spec(raw)
            self.assertIsNotNone(spec, raw)
            self.assertEqual(spec.kind, kind)
            self.assertFalse(spec.is_prerelease, raw)

    def test_prerelease_forms(self):
        for raw in ("1.0.0-beta.1", "2.0.0-rc1+build-5", "latest-beta"):
            self.assertTrue(parse_version_spec(raw).is_prerelease, raw)

    def test_build_metadata_with_hyphen_is_not_prerelease(self):
        self.assertFalse(parse_version_spec("1.0.0+build-5").is_prerelease)

    def test_rejected_forms(self):
        rejected = (
            "1.2",
            "v1.2.3",
            "^1.2",
            "=>1.0.0",
            "newest",
            "",
            "1.2.3.4",
            "1.2.3\n",
            "latest\n",
            "\u0661.\u0662.\u0663",
        )
        for raw in rejected:
            self.assertIsNone(parse_version_spec(raw), raw)


class NodeVersionLintTests(unittest.TestCase):
    def lint_versioned(self, version, **options):
        node = x_listener()
        if version is not None:
            node["version"] = version
        return FlowLinter(options=LintOptions(**options)).lint({"nodes": [node], "edges": []})

    def test_unversioned_nodes_pass_by_default(self):
        self.assertEqual(self.lint_versioned(None), [])

    def test_missing_version_warns_when_required(self):
        issues = self.lint_versioned(None, require_versions=True)
        self.assertEqual(codes(issues), ["missing-node-version"])
        self.assertTrue(issues[0].is_warning)

    def test_valid_version(self):
        self.assertEqual(self.lint_versioned("1.4.0", require_versions=True), [])

    def test_invalid_version_syntax(self):
        self.assertEqual(codes(self.lint_versioned("1.4")), ["invalid-version-syntax"])
        self.assertEqual(codes(self.lint_versioned(14)), ["invalid-version-syntax"])

    def test_version_with_trailing_newline_or_non_ascii_digits_is_invalid(self):
        self.assertEqual(codes(self.lint_versioned("1.2.3\n")), ["invalid-version-syntax"])
        self.assertEqual(codes(self.lint_versioned("\u0661.\u0662.\u0663")), ["invalid-version-syntax"])

    def test_prerelease_version_warns(self):
        issues = self.lint_versioned("1.4.0-alpha")
        self.assertEqual(codes(issues), ["prerelease-version"])
        self.assertTrue(issues[0].is_warning)


if __name__ == "__main__":
    unittest.main()
