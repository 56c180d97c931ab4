"""Capability Tokens — tests for token minting and comparison."""

from guestbook.core.tokens import issue_token, tokens_match


def test_issue_token_is_256_bit_hex():
    token = issue_token()
    assert len(token) == 64
    int(token, 16)


def test_issue_token_is_unique():
    assert len({issue_token() for _ in range(100)}) == 100


def test_tokens_match_only_identical_values():
    token = issue_token()
    assert tokens_match(token, token)
    assert not tokens_match(token, issue_token())


def test_tokens_match_never_matches_missing_values():
    assert not tokens_match(None, None)
    assert not tokens_match("", "")
    assert not tokens_match(issue_token(), None)
    assert not tokens_match(None, issue_token())
