"""Workforce Analytics package.

Feature modules (members, attendance, tasks, ratings) hold the domain
records and their status rules; ``analytics`` holds the shared
filter/sort/paginate/statistics/series engine; ``dashboard`` and
``performance`` compose that engine for the two reporting views, with a thin
Flask controller layer on top.
"""
