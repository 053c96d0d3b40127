DISCLAIMER = (
    "Figures are pre-qualification estimates built from borrower-stated income, assets and debts. "
    "Closing costs use a flat 3% of the loan amount and prepaids assume six months of taxes and insurance. "
    "AUS findings, verified documentation, lender overlays and underwriter discretion prevail."
)

# Back-end DTI ceilings used for the max purchase power projection.
DTI_TIERS = (43, 45, 50)

# 30-year fixed; the term is not configurable.
AMORTIZATION_MONTHS = 360

# Average weeks per month (52 / 12) used for hourly pay.
WEEKS_PER_MONTH = 4.333

# Down payment assumed for max purchase power when no purchase price is entered.
DEFAULT_DOWN_PAYMENT_FRACTION = 0.03

CLOSING_COST_PCT = 3.0
PREPAID_ESCROW_MONTHS = 6

PMI_LTV_THRESHOLD = 80.0

LOAN_PURPOSES = ("Purchase", "Refinance")

SALARY_FREQUENCIES = {"annual": 1, "monthly": 12, "weekly": 52}

ASSET_TYPES = (
    "Checking",
    "Savings",
    "401(k)/IRA",
    "Stocks/Investments",
    "Gift Funds",
    "Other",
)
NON_LIQUID_ASSET_TYPES = frozenset({"401(k)/IRA"})

DEBT_TYPES = (
    "Current Rent/Mortgage",
    "Auto Loan",
    "Student Loans",
    "Credit Card",
    "Personal Loan",
    "Child Support/Alimony",
    "Other",
)

OTHER_INCOME_TYPES = (
    "Rental Income",
    "Social Security",
    "Pension",
    "Disability",
    "Child Support/Alimony",
    "Other",
)
