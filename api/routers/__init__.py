"""
API Routers - Organized endpoint handlers for the camp marketplace API.

Each router handles a specific domain:
- camps: Countries, approved camp listing and camp details
- submissions: Camp owner submissions (multipart intake)
- admin: Submission moderation (approve / reject)
- bookings: Booking requests and the prefilled booking e-mail
- reviews: Reviews and owner replies
- owner: Camp owner dashboard, camp edits and image management
- profile: Profile updates
- navigation: Named route table
"""
