"""Application services: storage, persistence and the budget tracker."""
