"""Shared configuration, error taxonomy and collaborator interfaces."""
