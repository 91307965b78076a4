"""
Tests for version_source.py module.

Tests tag selection, branch name sanitizing and version resolution.
"""

from git_version_suggester.version_source import (
    Version,
    VersionSource,
    get_most_recent_tag,
    resolve,
    should_use_tags,
    version_from_branch_name,
    version_from_tag
)


class TestGetMostRecentTag:
    """Test the length-then-name tag ordering."""

    def test_numeric_suffixes(self):
        tags = ['dev-1', 'dev-10', 'dev-11', 'dev-2', 'dev-3']
        assert get_most_recent_tag(tags) == 'dev-11'

    def test_same_length_uses_name(self):
        assert get_most_recent_tag(['v1.2.3', 'v1.2.4', 'v1.2.2']) == 'v1.2.4'

    def test_longer_tag_wins_even_if_lower(self):
        # Length decides before the name, this is not a numeric sort
        assert get_most_recent_tag(['v9.0.0', 'v1.0.10']) == 'v1.0.10'

    def test_empty(self):
        assert get_most_recent_tag([]) is None

    def test_input_not_mutated(self):
        tags = ['b', 'a']
        get_most_recent_tag(tags)
        assert tags == ['b', 'a']


class TestVersionFromTag:
    """Test prefix stripping."""

    def test_strip_prefix(self):
        assert version_from_tag('v1.2.3', 'v') == Version('1.2.3', VersionSource.TAG)

    def test_prefix_only_stripped_at_start(self):
        assert version_from_tag('release-v1', 'release-').value == 'v1'

    def test_empty_prefix(self):
        assert version_from_tag('1.0.0', '').value == '1.0.0'


class TestVersionFromBranchName:
    """Test snapshot versions from branch names."""

    def test_sanitize(self):
        version = version_from_branch_name('feature/AOS-123-new-thing')
        assert version == Version('feature_AOS_123_new_thing-SNAPSHOT', VersionSource.BRANCH)

    def test_plain_branch(self):
        assert version_from_branch_name('master').value == 'master-SNAPSHOT'

    def test_custom_postfix(self):
        assert version_from_branch_name('develop', postfix='.dev').value == 'develop.dev'

    def test_max_length_truncates_name(self):
        branch = 'feature/' + 'x' * 100
        version = version_from_branch_name(branch, max_length=63)
        assert len(version.value) == 63
        assert version.value.endswith('-SNAPSHOT')
        assert version.value.startswith('feature_xxx')

    def test_max_length_not_reached(self):
        assert version_from_branch_name('master', max_length=63).value == 'master-SNAPSHOT'


class TestShouldUseTags:
    """Test when tags on HEAD decide the version."""

    def test_default(self):
        assert should_use_tags('master') is True
        assert should_use_tags(None) is True

    def test_disabled(self):
        assert should_use_tags('master', try_tags=False) is False

    def test_branch_list(self):
        assert should_use_tags('master', branches_to_use_tags_for=['master']) is True
        assert should_use_tags('develop', branches_to_use_tags_for=['master']) is False


class TestResolve:
    """Test version resolution priority."""

    def test_tag_wins(self):
        version = resolve(['v1.0.0', 'v1.0.1'], 'master')
        assert version == Version('1.0.1', VersionSource.TAG)
        assert version.is_from_tag

    def test_branch_when_no_tag(self):
        version = resolve([], 'feature/foo')
        assert version == Version('feature_foo-SNAPSHOT', VersionSource.BRANCH)
        assert not version.is_from_tag

    def test_fallback(self):
        assert resolve([], None) == Version('unknown', VersionSource.FALLBACK)

    def test_custom_fallback(self):
        assert resolve([], None, fallback_version='0.0.0').value == '0.0.0'

    def test_custom_prefix(self):
        assert resolve(['release-2.0.0'], 'master', version_prefix='release-').value == '2.0.0'

    def test_max_length(self):
        version = resolve([], 'a' * 80, max_length=20)
        assert version.value == 'a' * 11 + '-SNAPSHOT'

    def test_str(self):
        assert str(resolve([], 'master')) == 'master-SNAPSHOT'
