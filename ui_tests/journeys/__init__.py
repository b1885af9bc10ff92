"""
End-to-end customer journeys.

    test_user_journey_ui  - onboarding, account opening, transfer and bill pay in the browser
    test_user_journey_api - REST login, profile, transfer and transaction history for the
                            most recently saved customer
"""
