"""Agreement scoring between two candidate translations.

Token-set Jaccard overlap: lower-case, split on whitespace, |A ∩ B| / |A ∪ B|.
It ignores word order and morphology and needs no language-specific tooling.
The merge thresholds were tuned against exactly this metric, so it is only
used to pick a disagreement regime, not to grade quality.
"""


class SimilarityScorer:
    """Computes token-set Jaccard similarity."""

    @staticmethod
    def tokens(text: str) -> set:
        return set(text.lower().split())

    def score(self, text_a: str, text_b: str) -> float:
        """Agreement score in [0, 1].

        Two texts with no tokens at all score 1.0 only if they are
        identical, otherwise 0.0.
        """
        tokens_a = self.tokens(text_a)
        tokens_b = self.tokens(text_b)

        union = tokens_a | tokens_b
        if not union:
            return 1.0 if text_a == text_b else 0.0

        return len(tokens_a & tokens_b) / len(union)
