"""Test fixtures package: in-memory chain provider and record builders."""
