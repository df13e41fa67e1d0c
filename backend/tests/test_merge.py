"""
tests/test_merge.py
===================
Regime selection and merge resolution.

Test categories:
    1. Regime boundaries (select_regime)
    2. Constant confidence per regime
    3. high_agreement and low_agreement_flagged merges (no arbiter call)
    4. verified_selection with a working arbiter
    5. verified_selection when the arbiter fails
    6. Threshold validation

All tests are offline: the arbiter talks to a scripted FakeGateway.
"""

import asyncio
import unittest

from app.core.translation.models import MergeStrategy, QAStatus
from app.core.translation.pipeline import (
    ARBITRATION_FALLBACK_CONFIDENCE,
    HIGH_AGREEMENT,
    LOW_AGREEMENT_FLAGGED,
    REGIMES,
    VERIFIED_SELECTION,
    MergeResolver,
    select_regime,
)
from tests.support import (
    LABEL_A,
    LABEL_B,
    MODEL_ARBITER,
    SPANISH,
    FakeGateway,
    build_arbiter,
    build_resolver,
    make_segment,
    provider_result,
)

# Ten shared tokens minus one swapped word: Jaccard 9/11, inside the verified band
VERIFIED_A = "uno dos tres cuatro cinco seis siete ocho nueve diez"
VERIFIED_B = "uno dos tres cuatro cinco seis siete ocho nueve once"


class TestSelectRegime(unittest.TestCase):

    def test_boundary_values(self):
        cases = [
            (1.0, HIGH_AGREEMENT),
            (0.95, HIGH_AGREEMENT),
            (0.90, HIGH_AGREEMENT),
            (0.8999, VERIFIED_SELECTION),
            (0.80, VERIFIED_SELECTION),
            (0.7001, VERIFIED_SELECTION),
            (0.70, LOW_AGREEMENT_FLAGGED),
            (0.30, LOW_AGREEMENT_FLAGGED),
            (0.0, LOW_AGREEMENT_FLAGGED),
        ]
        for score, expected in cases:
            with self.subTest(score=score):
                self.assertIs(select_regime(score), expected)

    def test_custom_thresholds(self):
        self.assertIs(select_regime(0.6, high_threshold=0.8, low_threshold=0.5), VERIFIED_SELECTION)
        self.assertIs(select_regime(0.8, high_threshold=0.8, low_threshold=0.5), HIGH_AGREEMENT)
        self.assertIs(select_regime(0.5, high_threshold=0.8, low_threshold=0.5), LOW_AGREEMENT_FLAGGED)

    def test_only_verified_selection_requires_arbitration(self):
        self.assertTrue(VERIFIED_SELECTION.requires_arbitration)
        self.assertFalse(HIGH_AGREEMENT.requires_arbitration)
        self.assertFalse(LOW_AGREEMENT_FLAGGED.requires_arbitration)


class TestRegimeConstants(unittest.TestCase):

    def test_confidence_per_regime(self):
        self.assertEqual(REGIMES[MergeStrategy.HIGH_AGREEMENT].confidence, 0.95)
        self.assertEqual(REGIMES[MergeStrategy.VERIFIED_SELECTION].confidence, 0.85)
        self.assertEqual(REGIMES[MergeStrategy.LOW_AGREEMENT_FLAGGED].confidence, 0.70)

    def test_every_strategy_has_a_regime(self):
        self.assertEqual(set(REGIMES), set(MergeStrategy))

    def test_fallback_confidence(self):
        self.assertEqual(ARBITRATION_FALLBACK_CONFIDENCE, 0.75)


class TestMergeWithoutArbiter(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.gateway = FakeGateway({MODEL_ARBITER: AssertionError("arbiter must not be called")})
        self.resolver = build_resolver(self.gateway)

    async def test_identical_translations_merge_as_high_agreement(self):
        segment = make_segment(1, "Hello, citizens.")
        merged = await self.resolver.merge(
            segment,
            provider_result("Hola, ciudadanos.", LABEL_A, 0.90),
            provider_result("Hola, ciudadanos.", LABEL_B, 0.85),
            SPANISH,
        )

        self.assertEqual(merged.segment_id, 1)
        self.assertEqual(merged.text, "Hola, ciudadanos.")
        self.assertEqual(merged.agreement_score, 1.0)
        self.assertEqual(merged.merge_strategy, MergeStrategy.HIGH_AGREEMENT)
        self.assertEqual(merged.confidence, 0.95)
        self.assertEqual(merged.primary_model, LABEL_A)
        self.assertEqual(merged.qa_status, QAStatus.APPROVED)
        self.assertFalse(merged.arbitration_fallback)
        self.assertEqual(self.gateway.calls, [])

    async def test_unrelated_translations_are_flagged_with_a_text(self):
        merged = await self.resolver.merge(
            make_segment(2, "We will invest fifty million dollars."),
            provider_result("We will invest fifty million dollars.", LABEL_A),
            provider_result("Completely unrelated sentence about weather.", LABEL_B, 0.85),
            SPANISH,
        )

        self.assertLessEqual(merged.agreement_score, 0.70)
        self.assertEqual(merged.merge_strategy, MergeStrategy.LOW_AGREEMENT_FLAGGED)
        self.assertEqual(merged.confidence, 0.70)
        self.assertEqual(merged.text, "We will invest fifty million dollars.")
        self.assertEqual(merged.primary_model, LABEL_A)
        self.assertEqual(merged.qa_status, QAStatus.FLAGGED)
        self.assertEqual(self.gateway.calls, [])

    async def test_confidence_ignores_provider_priors(self):
        merged = await self.resolver.merge(
            make_segment(),
            provider_result("Hola", LABEL_A, 0.10),
            provider_result("Hola", LABEL_B, 0.20),
            SPANISH,
        )
        self.assertEqual(merged.confidence, 0.95)

    async def test_precomputed_score_is_used(self):
        merged = await self.resolver.merge(
            make_segment(),
            provider_result("Hola"),
            provider_result("Adiós", LABEL_B),
            SPANISH,
            agreement_score=0.95,
        )
        self.assertEqual(merged.merge_strategy, MergeStrategy.HIGH_AGREEMENT)
        self.assertEqual(merged.agreement_score, 0.95)

    async def test_provider_results_are_kept(self):
        result_a = provider_result("Hola", LABEL_A)
        result_b = provider_result("Hola", LABEL_B, 0.85)
        merged = await self.resolver.merge(make_segment(), result_a, result_b, SPANISH)

        self.assertEqual(merged.provider_results.a, result_a)
        self.assertEqual(merged.provider_results.b, result_b)


class TestVerifiedSelection(unittest.IsolatedAsyncioTestCase):

    async def _merge(self, arbiter_answer):
        gateway = FakeGateway({MODEL_ARBITER: arbiter_answer})
        resolver = build_resolver(gateway)
        merged = await resolver.merge(
            make_segment(3, "one two three four five six seven eight nine ten"),
            provider_result(VERIFIED_A, LABEL_A),
            provider_result(VERIFIED_B, LABEL_B, 0.85),
            SPANISH,
        )
        return merged, gateway

    async def test_score_falls_in_verified_band(self):
        merged, _ = await self._merge("A")
        self.assertAlmostEqual(merged.agreement_score, 9 / 11)
        self.assertEqual(merged.merge_strategy, MergeStrategy.VERIFIED_SELECTION)

    async def test_arbiter_picks_a(self):
        merged, gateway = await self._merge("A")

        self.assertEqual(merged.text, VERIFIED_A)
        self.assertEqual(merged.primary_model, LABEL_A)
        self.assertEqual(merged.confidence, 0.85)
        self.assertEqual(merged.qa_status, QAStatus.NEEDS_REVIEW)
        self.assertFalse(merged.arbitration_fallback)
        self.assertEqual(len(gateway.calls_for(MODEL_ARBITER)), 1)

    async def test_arbiter_picks_b(self):
        merged, _ = await self._merge("B")

        self.assertEqual(merged.text, VERIFIED_B)
        self.assertEqual(merged.primary_model, LABEL_B)
        self.assertEqual(merged.confidence, 0.85)
        self.assertEqual(merged.merge_strategy, MergeStrategy.VERIFIED_SELECTION)

    async def test_arbiter_answer_is_trimmed(self):
        merged, _ = await self._merge("  b\n")
        self.assertEqual(merged.primary_model, LABEL_B)

    async def test_arbiter_prompt_shows_both_candidates(self):
        _, gateway = await self._merge("A")
        call = gateway.calls_for(MODEL_ARBITER)[0]

        self.assertIn('Translation A: "%s"' % VERIFIED_A, call.user_prompt)
        self.assertIn('Translation B: "%s"' % VERIFIED_B, call.user_prompt)
        self.assertIn("Target language: Spanish", call.user_prompt)


class TestArbitrationFallback(unittest.IsolatedAsyncioTestCase):

    async def _merge(self, arbiter_answer):
        gateway = FakeGateway({MODEL_ARBITER: arbiter_answer})
        resolver = build_resolver(gateway)
        return await resolver.merge(
            make_segment(4),
            provider_result(VERIFIED_A, LABEL_A),
            provider_result(VERIFIED_B, LABEL_B, 0.85),
            SPANISH,
        )

    def _assert_fallback(self, merged):
        self.assertEqual(merged.text, VERIFIED_A)
        self.assertEqual(merged.primary_model, LABEL_A)
        self.assertEqual(merged.confidence, 0.75)
        self.assertEqual(merged.merge_strategy, MergeStrategy.VERIFIED_SELECTION)
        self.assertEqual(merged.qa_status, QAStatus.FLAGGED)
        self.assertTrue(merged.arbitration_fallback)

    async def test_arbiter_error_falls_back_to_a(self):
        self._assert_fallback(await self._merge(RuntimeError("service unavailable")))

    async def test_arbiter_timeout_falls_back_to_a(self):
        self._assert_fallback(await self._merge(asyncio.TimeoutError()))

    async def test_unparseable_answer_falls_back_to_a(self):
        for answer in ("C", "", "Translation B", "AB"):
            with self.subTest(answer=answer):
                self._assert_fallback(await self._merge(answer))


class TestThresholdValidation(unittest.TestCase):

    def setUp(self):
        self.arbiter = build_arbiter(FakeGateway({}))

    def test_rejects_inverted_thresholds(self):
        with self.assertRaises(ValueError):
            MergeResolver(self.arbiter, high_threshold=0.6, low_threshold=0.8)

    def test_rejects_equal_thresholds(self):
        with self.assertRaises(ValueError):
            MergeResolver(self.arbiter, high_threshold=0.8, low_threshold=0.8)

    def test_rejects_out_of_range(self):
        with self.assertRaises(ValueError):
            MergeResolver(self.arbiter, high_threshold=1.2, low_threshold=0.7)
        with self.assertRaises(ValueError):
            MergeResolver(self.arbiter, high_threshold=0.9, low_threshold=-0.1)

    def test_defaults(self):
        resolver = MergeResolver(self.arbiter)
        self.assertEqual(resolver.high_threshold, 0.90)
        self.assertEqual(resolver.low_threshold, 0.70)


if __name__ == "__main__":
    unittest.main()
