'''Score scales mapping ratings to bounded score ballot values.

A score scale converts the signed ratings of the rating model to integer
scores from 0 to a maximum N, as used by score ballots. The thresholds are
precomputed once per scale by sampling the seven fixed rating levels evenly
across the N + 1 scores, so that the most negative level anchors score 0 and
the most positive level anchors score N. A rating scores the highest score
whose anchoring level it reaches.
'''

from typing import Dict, List, Tuple

import votieworld.vote


class ScoreScale:
    '''A mapping of ratings to scores from 0 to max_score inclusive.

    Use :func:`get` to obtain shared instances; the thresholds never change.

    :param max_score: The highest score on the scale (N).
    '''
    def __init__(self, max_score: int):
        if max_score < 1:
            raise ValueError(f'score scale needs a positive maximum,'
                             f' got {max_score}')
        self.max_score = max_score
        self.thresholds = self._compute_thresholds(max_score)

    @staticmethod
    def _compute_thresholds(max_score: int) -> List[Tuple[int, int]]:
        levels = votieworld.vote.WantLevel.ALL
        top_index = len(levels) - 1
        ascending = [
            (levels[score * top_index // max_score], score)
            for score in range(max_score + 1)
        ]
        # best score first
        return list(reversed(ascending))

    def score(self, rating: int) -> int:
        '''Return the score for the rating.

        Ratings below the lowest level score zero, ratings above the highest
        level score the maximum.
        '''
        for level, score in self.thresholds:
            if level <= rating:
                return score
        return 0

    def __repr__(self):
        return f'{self.__class__.__name__}({self.max_score})'


_SCALES: Dict[int, ScoreScale] = {}


def get(max_score: int) -> ScoreScale:
    '''Return the score scale with the given maximum, building it once.'''
    if max_score not in _SCALES:
        _SCALES[max_score] = ScoreScale(max_score)
    return _SCALES[max_score]
