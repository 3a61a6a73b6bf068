"""Task Tracker: create, update, complete and delete tasks over HTTP."""
