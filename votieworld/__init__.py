"""Votieworld - the election engine of a world of voties.

The voties of the world periodically hold elections deciding what to build
next. An election runs through these parts:

-   The options are assembled from the baseline proposals and the wants of
    the population; see the ``option`` and ``election`` modules.
-   Every voter rates every option from its needs, its personal traits and
    the state of the world. This is the task of the ``rating`` module.
-   The ratings are encoded into the ballots of the election's voting method
    by the ``vote`` module and identical ballots are bundled together.
-   The ``evaluate`` subpackage tallies the ballots under one of seven voting
    methods; the ``system`` module looks them up by the election type.
-   The :class:`office.ElectionOffice` opens elections, records votes, and
    closes and resolves elections as simulated time passes.
"""
