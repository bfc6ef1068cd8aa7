"""캐셔(수납) 데이터 접근 코어 패키지.

Cashier data-access core package.
Generic voidable-entity repository and data services for billable items,
departments, and bills, plus a thin FastAPI layer over them.
"""
