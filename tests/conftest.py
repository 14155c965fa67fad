import matplotlib

# Charts are written to files only, never shown
matplotlib.use("Agg")
