'''Evaluate the results of the elections.

Every evaluator encodes the voters' rating vectors into ballots of its own
type, bundles identical ballots together and tallies them to select a single
winning option. The result objects (subclasses of
:class:`core.ElectionResult`) keep the full breakdown of the count so that
elections can be compared and displayed.

Exact ties never raise; they are resolved in favor of the option listed
earlier in the election. Use :mod:`votieworld.system` to look evaluators up
by the election type.
'''

from votieworld.evaluate.core import *    # noqa
