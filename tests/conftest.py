# tests/conftest.py
import matplotlib

matplotlib.use("Agg")  # no GUI in CI
