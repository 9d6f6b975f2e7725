"""
Demo accounts for the Task & Incentive Tracker
Admin-portal accounts (main admin, sub-admins, managers) and a handful of
employee-side users to try the task and incentive endpoints with
"""

# The main admin must come first: sub-admins are attached to it
DEMO_ADMINS = [
    {
        "name": "Main Administrator",
        "email": "admin@4am.com",
        "password": "admin123",
        "role": "main_admin",
    },
    {
        "name": "Sara Mahmoud",
        "email": "sara.mahmoud@4am.com",
        "password": "subadmin123",
        "role": "sub_admin",
    },
    {
        "name": "Omar Khaled",
        "email": "omar.khaled@4am.com",
        "password": "subadmin123",
        "role": "sub_admin",
    },
    {
        "name": "Mr. Ahmed Nagi",
        "email": "ahmed.nagi@4am.com",
        "password": "manager123",
        "role": "manager",
    },
    {
        "name": "Mr. Ibrahim Ahmed",
        "email": "ibrahim.ahmed@4am.com",
        "password": "manager123",
        "role": "manager",
    },
]

DEMO_USERS = [
    {
        "name": "Lina Hassan",
        "email": "lina.hassan@company.com",
        "password": "password123",
        "user_type": "assistant",
        "department": "Operations",
    },
    {
        "name": "Youssef Adel",
        "email": "youssef.adel@company.com",
        "password": "password123",
        "user_type": "employee",
        "department": "Engineering",
    },
    {
        "name": "Mona Samir",
        "email": "mona.samir@company.com",
        "password": "password123",
        "user_type": "employee",
        "department": "Sales",
    },
    {
        "name": "Karim Fathy",
        "email": "karim.fathy@company.com",
        "password": "password123",
        "user_type": "employee",
        "department": "Engineering",
    },
]
