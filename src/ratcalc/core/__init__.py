"""Core ratcalc modules: values, tokens, trees, and the evaluation pipeline."""
