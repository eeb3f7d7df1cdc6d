"""Shell commands exposing ColReduce functionalities.

ColStats (column statistics)
============================

``colreduce-stats`` prints descriptive statistics of the numeric columns of a CSV file::

    colreduce-stats -x season data/predictions.csv

The file can also be a remote one::

    colreduce-stats https://example.com/predictions.csv -r mean -r sample_stddev

It can be tested against the provided example data generating it with
``python examples/generate_test_data.py`` and then running::

    colreduce-stats data/predictions.csv -c score1 -c score2 -c spi1 --benchmark 200
"""
