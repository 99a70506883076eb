import re

import pytest

from conftest import sequential_codes
from shopfront.core.codes import CODE_ALPHABET, gen_discount_code
from shopfront.core.errors import (
    DiscountAlreadyUsed,
    DiscountMismatch,
    DiscountNotActive,
    DiscountNotEligible,
)
from shopfront.services.discounts import DiscountEngine


@pytest.fixture()
def engine():
    return DiscountEngine(3, code_factory=sequential_codes())


class TestThreshold:
    @pytest.mark.parametrize("threshold", [0, -1])
    def test_non_positive_threshold_defaults_to_five(self, threshold):
        engine = DiscountEngine(threshold)
        assert engine.threshold == 5
        assert engine.next_eligible_order == 5

    def test_initial_state(self, engine):
        assert engine.next_eligible_order == 3
        assert engine.active is None
        assert engine.history() == []


class TestGenerate:
    def test_not_eligible_before_threshold(self, engine):
        with pytest.raises(DiscountNotEligible):
            engine.generate(2)
        assert engine.active is None

    def test_generate_at_threshold(self, engine):
        code = engine.generate(3)
        assert code.code == "DISC-T00001"
        assert code.percentage == 10
        assert code.eligible_order_number == 3
        assert code.is_redeemed is False
        assert code.redeemed_at is None
        assert engine.active.code == code.code

    def test_generate_past_threshold(self, engine):
        assert engine.generate(7).eligible_order_number == 3

    def test_second_generate_fails_while_code_is_active(self, engine):
        engine.generate(3)
        with pytest.raises(DiscountNotEligible):
            engine.generate(3)
        with pytest.raises(DiscountNotEligible):
            engine.generate(100)

    def test_returned_code_is_a_copy(self, engine):
        code = engine.generate(3)
        code.code = "HACKED"
        assert engine.active.code == "DISC-T00001"

    def test_skips_codes_already_in_history(self):
        codes = iter(["DISC-AAAAAA", "DISC-AAAAAA", "DISC-BBBBBB"])
        engine = DiscountEngine(1, code_factory=lambda: next(codes))
        engine.generate(1)
        engine.redeem("DISC-AAAAAA")
        assert engine.generate(2).code == "DISC-BBBBBB"

    def test_gives_up_when_every_candidate_is_taken(self):
        engine = DiscountEngine(1, code_factory=lambda: "DISC-SAMESS")
        engine.generate(1)
        engine.redeem("DISC-SAMESS")
        with pytest.raises(RuntimeError):
            engine.generate(2)


class TestRedeem:
    def test_redeem_without_active_code(self, engine):
        with pytest.raises(DiscountNotActive):
            engine.redeem("DISC-WHATEVER")

    def test_mismatch_leaves_code_active(self, engine):
        engine.generate(3)
        with pytest.raises(DiscountMismatch):
            engine.redeem("DISC-NOPE00")
        assert engine.active is not None
        assert engine.next_eligible_order == 3

    def test_match_is_case_sensitive(self, engine):
        engine.generate(3)
        with pytest.raises(DiscountMismatch):
            engine.redeem("disc-t00001")

    def test_redeem_moves_code_to_history(self, engine):
        engine.generate(3)
        redeemed = engine.redeem("DISC-T00001")

        assert redeemed.is_redeemed is True
        assert redeemed.redeemed_at is not None
        assert redeemed.percentage == 10
        assert engine.active is None
        assert [c.code for c in engine.history()] == ["DISC-T00001"]
        assert engine.next_eligible_order == 6

    def test_check_leaves_state_alone(self, engine):
        engine.generate(3)
        checked = engine.check("DISC-T00001")

        assert checked.code == "DISC-T00001"
        assert checked.is_redeemed is False
        assert engine.active.code == "DISC-T00001"
        assert engine.next_eligible_order == 3
        with pytest.raises(DiscountMismatch):
            engine.check("DISC-T00002")
        assert engine.redeem("DISC-T00001").is_redeemed is True

    def test_second_redeem_fails(self, engine):
        engine.generate(3)
        engine.redeem("DISC-T00001")
        with pytest.raises(DiscountNotActive):
            engine.redeem("DISC-T00001")

    def test_already_used_is_checked(self, engine):
        engine.generate(3)
        # Not reachable through the public API; force the flag to exercise the guard.
        engine._active = engine._active.model_copy(update={"is_redeemed": True})
        with pytest.raises(DiscountAlreadyUsed):
            engine.redeem("DISC-T00001")

    def test_history_lists_redeemed_then_active(self, engine):
        engine.generate(3)
        engine.redeem("DISC-T00001")
        engine.generate(6)
        history = engine.history()
        assert [c.code for c in history] == ["DISC-T00001", "DISC-T00002"]
        assert [c.is_redeemed for c in history] == [True, False]
        assert history[1].eligible_order_number == 6


class TestCodeFormat:
    def test_default_codes(self):
        pattern = re.compile(rf"^DISC-[{CODE_ALPHABET}]{{6}}$")
        for _ in range(50):
            assert pattern.match(gen_discount_code())

    def test_alphabet_has_no_confusable_characters(self):
        for ch in "01IO":
            assert ch not in CODE_ALPHABET
