"""StudyCards - flashcard study and quiz engine"""

__version__ = "1.0.0"
