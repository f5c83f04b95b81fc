from __future__ import annotations

from typing import NamedTuple


class ChartAccount(NamedTuple):
    account_number: str
    name: str
    account_type: str
    sub_type: str
    is_tax_deductible: bool
    tax_category: str | None
    description: str


# Default restaurant chart. Posting adapters refer to these numbers
# ("1000" cash, "1100" card receivables, "2000" AP, "2200" sales tax,
# "2400" gift cards, "4000" food sales, "4300" other income, "9200" misc).
DEFAULT_CHART_OF_ACCOUNTS: tuple[ChartAccount, ...] = (
    ChartAccount("1000", "Checking Account", "asset", "cash", False, None, "Primary business checking"),
    ChartAccount("1010", "Savings Account", "asset", "cash", False, None, "Business savings"),
    ChartAccount("1020", "Petty Cash", "asset", "cash", False, None, "Cash on hand for small expenses"),
    ChartAccount("1100", "Accounts Receivable", "asset", "receivable", False, None, "Money owed to us"),
    ChartAccount("1200", "Food Inventory", "asset", "inventory", False, None, "Value of food on hand"),
    ChartAccount("1210", "Beverage Inventory", "asset", "inventory", False, None, "Value of beverages on hand"),
    ChartAccount("1220", "Supplies Inventory", "asset", "inventory", False, None, "Value of supplies on hand"),
    ChartAccount("1300", "Prepaid Expenses", "asset", "prepaid", False, None, "Insurance, rent paid in advance"),
    ChartAccount("1500", "Kitchen Equipment", "asset", "fixed_asset", False, None, "Ovens, refrigerators, etc."),
    ChartAccount("1510", "Furniture & Fixtures", "asset", "fixed_asset", False, None, "Tables, chairs, decor"),
    ChartAccount("1520", "Leasehold Improvements", "asset", "fixed_asset", False, None, "Building modifications"),
    ChartAccount("1600", "Accumulated Depreciation", "asset", "contra_asset", False, None, "Depreciation of fixed assets"),
    ChartAccount("2000", "Accounts Payable", "liability", "payable", False, None, "Money owed to vendors"),
    ChartAccount("2100", "Credit Card Payable", "liability", "payable", False, None, "Business credit card balance"),
    ChartAccount("2200", "Sales Tax Payable", "liability", "payable", False, None, "Collected sales tax"),
    ChartAccount("2300", "Payroll Taxes Payable", "liability", "payable", False, None, "Withheld taxes to be paid"),
    ChartAccount("2400", "Gift Cards Outstanding", "liability", "deferred_revenue", False, None, "Unredeemed gift card value"),
    ChartAccount("2500", "Loans Payable", "liability", "long_term", False, None, "Business loans"),
    ChartAccount("3000", "Owner Equity", "equity", "capital", False, None, "Owner investment"),
    ChartAccount("3100", "Retained Earnings", "equity", "retained", False, None, "Accumulated profits"),
    ChartAccount("3200", "Owner Draws", "equity", "draws", False, None, "Money taken out by owner"),
    ChartAccount("4000", "Food Sales", "revenue", "sales", False, None, "Revenue from food sales"),
    ChartAccount("4010", "Beverage Sales", "revenue", "sales", False, None, "Non-alcoholic beverage sales"),
    ChartAccount("4020", "Alcohol Sales", "revenue", "sales", False, None, "Beer, wine, spirits sales"),
    ChartAccount("4100", "Catering Revenue", "revenue", "service", False, None, "Catering income"),
    ChartAccount("4200", "Gift Card Sales", "revenue", "deferred", False, None, "Gift card purchases"),
    ChartAccount("4300", "Other Income", "revenue", "other", False, None, "Miscellaneous income"),
    ChartAccount("5000", "Food Cost", "expense", "cogs", True, "cost_of_goods_sold", "Ingredients and raw food"),
    ChartAccount("5010", "Beverage Cost", "expense", "cogs", True, "cost_of_goods_sold", "Non-alcoholic beverage costs"),
    ChartAccount("5020", "Alcohol Cost", "expense", "cogs", True, "cost_of_goods_sold", "Beer, wine, spirits cost"),
    ChartAccount("5100", "Packaging & To-Go", "expense", "cogs", True, "cost_of_goods_sold", "Containers, bags, utensils"),
    ChartAccount("6000", "Kitchen Wages", "expense", "payroll", True, "wages", "Kitchen staff wages"),
    ChartAccount("6010", "Server Wages", "expense", "payroll", True, "wages", "Server wages (before tips)"),
    ChartAccount("6020", "Management Salaries", "expense", "payroll", True, "wages", "Manager salaries"),
    ChartAccount("6100", "Payroll Taxes", "expense", "payroll", True, "taxes", "Employer payroll tax expense"),
    ChartAccount("6110", "Employee Benefits", "expense", "payroll", True, "employee_benefits", "Health insurance, etc."),
    ChartAccount("6120", "Workers Compensation", "expense", "payroll", True, "insurance", "Workers comp insurance"),
    ChartAccount("7000", "Rent", "expense", "operating", True, "rent", "Monthly rent payment"),
    ChartAccount("7010", "Utilities - Electric", "expense", "operating", True, "utilities", "Electricity"),
    ChartAccount("7020", "Utilities - Gas", "expense", "operating", True, "utilities", "Natural gas"),
    ChartAccount("7030", "Utilities - Water", "expense", "operating", True, "utilities", "Water and sewer"),
    ChartAccount("7040", "Phone & Internet", "expense", "operating", True, "utilities", "Communication services"),
    ChartAccount("7050", "Trash Removal", "expense", "operating", True, "utilities", "Garbage and recycling"),
    ChartAccount("7100", "Insurance - Liability", "expense", "operating", True, "insurance", "General liability insurance"),
    ChartAccount("7110", "Insurance - Property", "expense", "operating", True, "insurance", "Property insurance"),
    ChartAccount("7200", "Repairs & Maintenance", "expense", "operating", True, "repairs", "Equipment and building repairs"),
    ChartAccount("7210", "Cleaning & Janitorial", "expense", "operating", True, "supplies", "Cleaning supplies and services"),
    ChartAccount("7220", "Pest Control", "expense", "operating", True, "supplies", "Pest control services"),
    ChartAccount("7300", "Equipment Rental", "expense", "operating", True, "rent", "Leased equipment"),
    ChartAccount("7310", "Linen & Laundry", "expense", "operating", True, "supplies", "Napkins, tablecloths, aprons"),
    ChartAccount("7400", "POS System & Tech", "expense", "operating", True, "supplies", "Software subscriptions"),
    ChartAccount("7410", "Credit Card Fees", "expense", "operating", True, "commissions", "Payment processing fees"),
    ChartAccount("7500", "Licenses & Permits", "expense", "operating", True, "licenses", "Business licenses, health permits"),
    ChartAccount("7510", "Professional Fees", "expense", "operating", True, "legal_professional", "Accountant, lawyer fees"),
    ChartAccount("7600", "Office Supplies", "expense", "operating", True, "supplies", "Paper, pens, office items"),
    ChartAccount("7610", "Smallwares", "expense", "operating", True, "supplies", "Plates, glasses, utensils"),
    ChartAccount("8000", "Advertising - Print", "expense", "marketing", True, "advertising", "Newspapers, magazines, flyers"),
    ChartAccount("8010", "Advertising - Digital", "expense", "marketing", True, "advertising", "Google, Facebook, Instagram ads"),
    ChartAccount("8020", "Advertising - Radio/TV", "expense", "marketing", True, "advertising", "Broadcast advertising"),
    ChartAccount("8100", "Social Media Marketing", "expense", "marketing", True, "advertising", "Paid social media campaigns"),
    ChartAccount("8110", "Website & SEO", "expense", "marketing", True, "advertising", "Website hosting, SEO services"),
    ChartAccount("8200", "Events & Sponsorships", "expense", "marketing", True, "advertising", "Community events, sports teams"),
    ChartAccount("8210", "Promotions & Discounts", "expense", "marketing", True, "advertising", "Promotional costs"),
    ChartAccount("8300", "Loyalty Program", "expense", "marketing", True, "advertising", "Rewards program costs"),
    ChartAccount("8400", "Photography & Video", "expense", "marketing", True, "advertising", "Menu photos, promotional videos"),
    ChartAccount("8500", "Public Relations", "expense", "marketing", True, "advertising", "PR services"),
    ChartAccount("9000", "Bank Charges", "expense", "other", True, "bank_charges", "Bank fees"),
    ChartAccount("9010", "Interest Expense", "expense", "other", True, "interest", "Loan interest"),
    ChartAccount("9100", "Depreciation Expense", "expense", "other", True, "depreciation", "Asset depreciation"),
    ChartAccount("9200", "Miscellaneous", "expense", "other", True, "other_expenses", "Other business expenses"),
    ChartAccount("9300", "Owner/Manager Meals", "expense", "other", True, "meals", "50% deductible meals"),
    ChartAccount("9400", "Training & Development", "expense", "other", True, "education", "Staff training"),
    ChartAccount("9500", "Travel & Transportation", "expense", "other", True, "travel", "Business travel"),
)
