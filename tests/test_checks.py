"""
Tests for corpus integrity checks.
"""

from corpus.checks import (
    CheckReport,
    Issue,
    check_fields,
    check_internal_links,
    check_round_trip,
    check_text,
    find_draft_groups,
    run_checks,
)
from corpus.document import PostDocument

from .conftest import SPRING_BOOT, write_post


def codes(issues, severity=None):
    return sorted(i.code for i in issues if severity is None or i.severity == severity)


class TestPerDocument:

    def test_clean_document(self):
        doc, issues = check_text(SPRING_BOOT)
        assert doc is not None
        assert codes(issues, "error") == []
        assert codes(issues, "warning") == []

    def test_unknown_shortcode_is_info(self):
        _, issues = check_text("---\ntitle: A\ndate: 2021-01-01\nurl: a\n---\n{{< youtube x >}}\n{{< youtube y >}}\n")
        assert codes(issues) == ["unknown-shortcode"]
        assert issues[0].severity == "info"

    def test_missing_front_matter(self):
        doc, issues = check_text("# no metadata")
        assert doc is None
        assert codes(issues) == ["front-matter-missing"]

    def test_invalid_yaml(self):
        _, issues = check_text("---\ntitle: [oops\n---\n")
        assert codes(issues, "error") == ["front-matter-invalid"]

    def test_not_a_mapping(self):
        _, issues = check_text("---\njust a string\n---\n")
        assert codes(issues, "error") == ["front-matter-not-mapping"]

    def test_missing_fields(self):
        _, issues = check_text("---\ncategories: [x]\n---\nBody")
        missing = {i.message: i.severity for i in issues if i.code == "missing-field"}
        assert missing == {
            "front matter has no 'title'": "error",
            "front matter has no 'date'": "error",
            "front matter has no 'url'": "warning",
        }

    def test_invalid_date(self):
        _, issues = check_text("---\ntitle: A\ndate: 24/02/2021\nmodified: soon\nurl: a\n---\n")
        assert codes(issues, "error") == ["invalid-date", "invalid-date"]

    def test_modified_before_date(self):
        issues = check_fields({"title": "A", "url": "a", "date": "2021-03-01", "modified": "2021-02-01"}, "a.md")
        assert codes(issues) == ["modified-before-date"]

    def test_mixed_naive_and_aware_dates_are_not_compared(self):
        issues = check_fields({"title": "A", "url": "a", "date": "2021-03-01T00:00:00Z", "modified": "2021-02-01"}, "a.md")
        assert issues == []

    def test_round_trip_mismatch(self):
        issues = check_round_trip({"title": "A", "score": float("nan")}, "a.md")
        assert codes(issues) == ["round-trip-mismatch"]

    def test_round_trip_of_loaded_front_matter(self):
        _, issues = check_text("---\ntitle: A\ndate: 2021-01-01\nurl: a\nweight: 3\ndraft: false\n---\n")
        assert "round-trip-mismatch" not in codes(issues)

    def test_impossible_date_is_invalid_front_matter(self):
        for stamp in ("2021-02-30", "2021-13-01"):
            doc, issues = check_text(f"---\ntitle: A\ndate: {stamp}\nurl: a\n---\n")
            assert doc is None
            assert codes(issues, "error") == ["front-matter-invalid"]

    def test_invalid_lastmod(self):
        _, issues = check_text("---\ntitle: A\ndate: 2021-01-01\nlastmod: someday\nurl: a\n---\n")
        assert codes(issues, "error") == ["invalid-date"]
        assert "lastmod" in issues[0].message

    def test_lastmod_before_date(self):
        issues = check_fields({"title": "A", "url": "a", "date": "2021-03-01", "lastmod": "2021-02-01"}, "a.md")
        assert codes(issues) == ["modified-before-date"]


    def test_unbalanced_shortcode(self):
        _, issues = check_text("---\ntitle: A\ndate: 2021-01-01\nurl: a\n---\n{{% info %}}\nnever closed\n")
        assert "unbalanced-shortcode" in codes(issues, "warning")

    def test_broken_anchor(self):
        _, issues = check_text("---\ntitle: A\ndate: 2021-01-01\nurl: a\n---\n## Real\n\n[ok](#real) [top](#) [bad](#nowhere)\n")
        broken = [i for i in issues if i.code == "broken-anchor"]
        assert len(broken) == 1
        assert "nowhere" in broken[0].message


class TestCorpus:

    def test_run_checks(self, corpus_root):
        report = run_checks(corpus_root)

        assert report.documents == 4
        assert report.errors == []
        assert codes(report.warnings) == ["broken-link", "duplicate-url", "duplicate-url"]

        dup_paths = sorted(i.path for i in report.issues if i.code == "duplicate-url")
        assert dup_paths == ["drafts-a/launchdarkly-react.md", "drafts-b/launchdarkly-react.md"]

        broken = [i for i in report.issues if i.code == "broken-link"]
        assert broken[0].path == "2022-01-10-nodejs-logging.md"
        assert "/does-not-exist/" in broken[0].message

        drafts = [i for i in report.issues if i.code == "possible-draft"]
        assert len(drafts) == 1
        assert "2 documents" in drafts[0].message

    def test_ok_and_strict(self, corpus_root):
        report = run_checks(corpus_root)
        assert report.ok()
        assert not report.ok(strict=True)

    def test_errors_fail_the_report(self, corpus_root):
        write_post(corpus_root, "broken.md", "---\ntitle: A\n---\n")
        report = run_checks(corpus_root)
        assert report.documents == 5
        assert not report.ok()
        assert [i.path for i in report.errors] == ["broken.md"]

    def test_impossible_date_does_not_stop_the_run(self, corpus_root):
        write_post(corpus_root, "leap.md", "---\ntitle: Leap\nurl: leap\ndate: 2021-02-30\n---\n")
        report = run_checks(corpus_root)
        assert report.documents == 5
        assert [(i.code, i.path) for i in report.errors] == [("front-matter-invalid", "leap.md")]

    def test_bad_encoding_is_an_error(self, corpus_root):
        (corpus_root / "latin1.md").write_bytes(b"---\ntitle: Caf\xe9\nurl: cafe\ndate: 2021-01-01\n---\n")
        report = run_checks(corpus_root)
        assert report.documents == 5
        assert [(i.code, i.path) for i in report.errors] == [("invalid-encoding", "latin1.md")]
        assert codes(report.warnings) == ["broken-link", "duplicate-url", "duplicate-url"]

    def test_redirect_sources_are_known_links(self, corpus_root):
        report = run_checks(corpus_root, redirects=["/does-not-exist", "/feed.xml"])
        assert "broken-link" not in codes(report.issues)

    def test_links_to_redirect_sources(self):
        doc = PostDocument(title="A", url="a", body="[old](/spring-boot-testcontainers) [gone](/nowhere/)")
        issues = check_internal_links([doc], redirects=["/spring-boot-testcontainers"])
        assert [i.message for i in issues] == ["link '/nowhere/' matches no post"]

    def test_checks_do_not_modify_files(self, corpus_root):
        before = {p: p.read_bytes() for p in corpus_root.rglob("*.md")}
        run_checks(corpus_root)
        assert before == {p: p.read_bytes() for p in corpus_root.rglob("*.md")}

    def test_ignore(self, corpus_root):
        report = run_checks(corpus_root, ignore={"drafts-b"})
        assert report.documents == 3
        assert "duplicate-url" not in codes(report.issues)

    def test_to_dict(self):
        report = CheckReport(documents=2, issues=[
            Issue("invalid-date", "error", "a.md", "bad"),
            Issue("duplicate-url", "warning", "b.md", "dup"),
            Issue("possible-draft", "info", "b.md", "draft"),
        ])
        data = report.to_dict()
        assert data["documents"] == 2
        assert data["errors"] == 1
        assert data["warnings"] == 1
        assert data["issues"][0] == {"code": "invalid-date", "severity": "error", "path": "a.md", "message": "bad"}


class TestDraftGroups:

    def test_similar_titles_group(self):
        docs = [
            PostDocument(title="Annotation Processing in Java", url="a"),
            PostDocument(title="Annotation processing in Java!", url="b"),
            PostDocument(title="Kotlin Coroutines", url="c"),
        ]
        groups = find_draft_groups(docs)
        assert [[d.url for d in g] for g in groups] == [["a", "b"]]

    def test_same_slug_groups_transitively(self):
        docs = [
            PostDocument(title="One", url="x"),
            PostDocument(title="Two", url="x"),
            PostDocument(title="Three", url="x"),
        ]
        assert [len(g) for g in find_draft_groups(docs)] == [3]

    def test_no_groups(self):
        assert find_draft_groups([PostDocument(title="A", url="a"), PostDocument(title="B", url="b")]) == []
