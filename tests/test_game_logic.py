from lotto_admin.core.game_logic import WinType, evaluate_bet, is_permutation


def test_straight_exact_match() -> None:
    result = evaluate_bet("123", "straight", ["123"])
    assert result.is_winning
    assert result.win_type == WinType.STRAIGHT
    assert result.matched_number == "123"


def test_straight_bet_never_wins_on_permutation() -> None:
    result = evaluate_bet("123", "straight", ["321"])
    assert not result.is_winning
    assert result.win_type == WinType.NONE
    assert result.matched_number is None


def test_standard_bet_is_treated_like_straight() -> None:
    assert evaluate_bet("456", "standard", ["456"]).win_type == WinType.STRAIGHT
    assert not evaluate_bet("456", "standard", ["654"]).is_winning


def test_rambolito_wins_on_permutation() -> None:
    result = evaluate_bet("123", "rambolito", ["321"])
    assert result.is_winning
    assert result.win_type == WinType.RAMBOLITO
    assert result.matched_number == "321"


def test_rambolito_uses_multiset_equality() -> None:
    assert evaluate_bet("112", "rambolito", ["121"]).is_winning
    assert not evaluate_bet("112", "rambolito", ["122"]).is_winning


def test_rambolito_exact_match_reports_straight() -> None:
    assert evaluate_bet("123", "rambolito", ["123"]).win_type == WinType.STRAIGHT


def test_bet_type_is_case_insensitive() -> None:
    assert evaluate_bet("123", "Rambolito", ["231"]).win_type == WinType.RAMBOLITO


def test_length_mismatch_never_matches() -> None:
    assert not evaluate_bet("12", "rambolito", ["123"]).is_winning
    assert not is_permutation("12", "123")


def test_first_matching_winning_number_is_reported() -> None:
    result = evaluate_bet("123", "rambolito", ["999", "312", "123"])
    assert result.win_type == WinType.RAMBOLITO
    assert result.matched_number == "312"


def test_no_winning_numbers_means_no_win() -> None:
    assert not evaluate_bet("123", "straight", []).is_winning
