# simulations/__init__.py
"""
Monte Carlo experiments for balls-into-bins on regular graphs.

Run a single configuration via:
    python -m simulations.run --topology random --n 28 --d 3 --balls 1000 --repetitions 10
Compare two algorithms via:
    python -m simulations.compare --algorithm-a greedy --algorithm-b one_choice --topology ring --n 64 --balls 10000 --repetitions 50
"""
