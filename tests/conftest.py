import matplotlib

# Off-screen backend for the plotting tests
matplotlib.use("Agg")
