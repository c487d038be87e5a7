"""
Configuration for the code bundler: the BundleConfig value, ambient
settings loading, and response file persistence.
"""
