"""SQLAlchemy persistence for banking records."""
