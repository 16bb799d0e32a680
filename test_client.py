#!/usr/bin/env python3
import requests
import json
import os
import sys
from datetime import date

BASE_URL = os.getenv("SHEETBUDGET_URL", "http://localhost:8000/api/v1")

CATEGORIES = ["Food", "Transport", "Entertainment", "Utilities", "Healthcare", "Education", "Shopping", "Other"]

# PINs entered during this session, sent as headers on every request
SESSION = {
    "family_pin": os.getenv("FAMILY_PIN", ""),
    "admin_pin": os.getenv("ADMIN_PIN", "")
}

def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')

def print_header(title: str):
    clear_screen()
    print("=" * 50)
    print(f" {title} ".center(50, "="))
    print("=" * 50)
    print()

def get_input(prompt: str, default: str = None) -> str:
    if default:
        result = input(f"{prompt} [{default}]: ").strip()
        if not result:
            return default
        return result
    return input(f"{prompt}: ").strip()

def current_month() -> str:
    return date.today().strftime("%Y-%m")

def auth_headers(admin: bool = False):
    headers = {"X-Family-Pin": SESSION["family_pin"]}
    if admin:
        headers["X-Admin-Pin"] = SESSION["admin_pin"]
    return headers

def make_request(method, endpoint, data=None, params=None, admin=False):
    """Helper function to make requests to the API"""
    url = f"{BASE_URL}{endpoint}"

    # Debug output
    print(f"\nMaking {method.upper()} request to {url}")
    if data:
        print(f"Request data: {json.dumps(data, indent=2)}")
    if params:
        print(f"Query params: {params}")

    try:
        if method.lower() == 'get':
            response = requests.get(url, params=params, headers=auth_headers(admin))
        elif method.lower() == 'post':
            response = requests.post(url, json=data, params=params, headers=auth_headers(admin))
        else:
            print(f"Unsupported method: {method}")
            return None

        # Check for successful response
        if 200 <= response.status_code < 300:
            if response.text:
                result = response.json()
                print(f"Response: {json.dumps(result, indent=2)}")
                return result
            return {}
        else:
            print(f"Error {response.status_code}: {response.text}")
            return None

    except requests.exceptions.RequestException as e:
        print(f"Request error: {str(e)}")
        return None
    except json.JSONDecodeError:
        print(f"Warning: Response was not valid JSON: {response.text}")
        return {}

# Auth operations
def verify_pin():
    print_header("Verify PIN")

    pin = get_input("PIN")
    result = make_request("post", "/auth/verify-pin", {"pin": pin})
    if result and result.get("success"):
        SESSION[f"{result['role']}_pin"] = pin
        print(f"\nStored {result['role']} PIN for this session")

    input("\nPress Enter to continue...")

# Expense operations
def add_expense():
    print_header("Add Expense")

    print("Categories: " + ", ".join(CATEGORIES))
    data = {
        "date": get_input("Date (DD/MM/YYYY)", date.today().strftime("%d/%m/%Y")),
        "memberName": get_input("Member Name"),
        "category": get_input("Category", "Other"),
        "description": get_input("Description (optional)"),
    }
    try:
        data["amount"] = float(get_input("Amount"))
    except ValueError:
        print("Amount must be a number.")
        input("\nPress Enter to continue...")
        return

    make_request("post", "/expenses/", data)
    input("\nPress Enter to continue...")

def list_expenses():
    print_header("List Expenses")

    month = get_input("Month (YYYY-MM)", current_month())
    result = make_request("get", "/expenses/", params={"month": month})
    if result is not None:
        expenses = result.get("expenses", [])
        print(f"\n{len(expenses)} expenses in {month}")
        for expense in expenses:
            print(f"  - {expense['date']} {expense['memberName']}: {expense['amount']} ({expense['category']})")

    input("\nPress Enter to continue...")

# Budget operations
def get_budget():
    print_header("Budget Summary")

    month = get_input("Month (YYYY-MM)", current_month())
    make_request("get", "/budget/", params={"month": month})
    input("\nPress Enter to continue...")

def set_budget():
    print_header("Set Monthly Budget (admin)")

    if not SESSION["admin_pin"]:
        print("Verify the admin PIN first.")
        input("\nPress Enter to continue...")
        return

    month = get_input("Month (YYYY-MM)", current_month())
    try:
        total_budget = float(get_input("Total Budget"))
    except ValueError:
        print("Total budget must be a number.")
        input("\nPress Enter to continue...")
        return

    make_request("post", "/budget/", {"month": month, "totalBudget": total_budget}, admin=True)
    input("\nPress Enter to continue...")

def show_dashboard():
    print_header("Dashboard")

    month = get_input("Month (YYYY-MM)", current_month())
    make_request("get", "/dashboard/", params={"month": month})
    input("\nPress Enter to continue...")

def main_menu():
    while True:
        print_header("Sheet Budget Test Client")

        print("1. Verify PIN")
        print("2. Add Expense")
        print("3. List Expenses")
        print("4. Budget Summary")
        print("5. Set Budget")
        print("6. Dashboard")
        print("0. Exit")

        choice = get_input("\nEnter your choice")

        if choice == "0":
            print("\nExiting...")
            sys.exit(0)
        elif choice == "1":
            verify_pin()
        elif choice == "2":
            add_expense()
        elif choice == "3":
            list_expenses()
        elif choice == "4":
            get_budget()
        elif choice == "5":
            set_budget()
        elif choice == "6":
            show_dashboard()

if __name__ == "__main__":
    try:
        main_menu()
    except KeyboardInterrupt:
        print("\nExiting...")
        sys.exit(0)
