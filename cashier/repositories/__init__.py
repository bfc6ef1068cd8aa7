"""레포지토리 패키지: 데이터베이스 쿼리 계층.

Repository package: Database query layer.
Each repository extends BaseRepository for generic save/delete/select and
adds entity-specific queries. Filters are expressed with the abstract
criteria in ``cashier.repositories.criteria``.
"""
