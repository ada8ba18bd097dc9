"""
Data Pipeline Scripts

- build_ngram_dictionary.py: Build the n-gram toxicity dictionary CSV
"""
