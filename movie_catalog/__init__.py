"""
movie_catalog: a small FastAPI + MongoDB site for keeping a list of movies.
"""
__version__ = "1.0.0"
