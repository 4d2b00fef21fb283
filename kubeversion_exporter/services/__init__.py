"""Services implementing the version checks and their collaborators."""
