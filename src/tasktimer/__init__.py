"""tasktimer - time spent on GitHub task issues."""
