"""서비스 패키지: 비즈니스 로직 계층.

Service package: Business logic layer.
Each data service extends BaseDataService, which validates input and
enforces the void/unvoid lifecycle before delegating to a repository.
"""
