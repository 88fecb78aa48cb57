"""Video feed toolkit: resumable downloads, comments, categories, SponsorBlock segments and recent history."""

__version__ = "0.1.0"