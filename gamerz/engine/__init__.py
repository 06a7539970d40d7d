"""Game-state engines (Tic-Tac-Toe, Hangman, Number Guess, Rock-Paper-Scissors).

Kept free of FastAPI and redis concerns so it can be driven by the session store and tests alike.
"""
