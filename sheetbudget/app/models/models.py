from enum import Enum

from sqlalchemy import Column, String, Integer, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# --- SHEET LAYOUT ---

SHEET_EXPENSES = "Expenses"
SHEET_BUDGETS = "MonthlyBudgets"

# Column order is part of the wire contract with the backing store and the archive files
EXPENSE_COLUMNS = ["id", "date", "memberName", "category", "description", "amount", "month", "createdAt"]
BUDGET_COLUMNS = ["month", "totalBudget", "totalSpent", "remainingBudget", "lastUpdated"]

# --- ENUMS ---

class Category(str, Enum):
    FOOD = "Food"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    UTILITIES = "Utilities"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    SHOPPING = "Shopping"
    OTHER = "Other"

class Role(str, Enum):
    FAMILY = "family"
    ADMIN = "admin"

# --- SQLALCHEMY MODELS ---
# Cells are stored as text, the way a spreadsheet hands them back.
# row_key only orders rows; a row's position is its rank by row_key and shifts after deletions.

class ExpenseRow(Base):
    __tablename__ = "expenses"
    row_key = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=True)
    date = Column(String, nullable=True)
    member_name = Column(String, nullable=True)
    category = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    amount = Column(String, nullable=True)
    month = Column(String, nullable=True, index=True)
    created_at = Column(String, nullable=True)

    def cells(self):
        return [
            self.id, self.date, self.member_name, self.category,
            self.description, self.amount, self.month, self.created_at
        ]

class BudgetRow(Base):
    __tablename__ = "monthly_budgets"
    row_key = Column(Integer, primary_key=True, autoincrement=True)
    month = Column(String, nullable=True)
    total_budget = Column(String, nullable=True)
    total_spent = Column(String, nullable=True)
    remaining_budget = Column(String, nullable=True)
    last_updated = Column(String, nullable=True)

    def cells(self):
        return [self.month, self.total_budget, self.total_spent, self.remaining_budget, self.last_updated]

# Attribute name for each sheet column, in column order
EXPENSE_ROW_ATTRS = ["id", "date", "member_name", "category", "description", "amount", "month", "created_at"]
BUDGET_ROW_ATTRS = ["month", "total_budget", "total_spent", "remaining_budget", "last_updated"]
