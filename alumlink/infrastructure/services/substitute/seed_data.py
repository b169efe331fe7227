"""Seed records loaded into every fresh substitute service instance."""

ALUMNI = [
    {
        "id": "1",
        "userId": "user_1",
        "firstName": "Sarah",
        "lastName": "Johnson",
        "graduationYear": 2018,
        "degree": "Computer Science",
        "currentCompany": "Google",
        "currentPosition": "Senior Software Engineer",
        "location": "San Francisco, CA",
        "isPublic": True,
        "skills": ["JavaScript", "React", "Node.js", "Python", "AWS"],
        "interests": ["Web Development", "Machine Learning", "Mentoring"],
        "createdAt": "2023-01-15T00:00:00+00:00",
        "updatedAt": "2024-01-10T00:00:00+00:00",
    },
    {
        "id": "2",
        "userId": "user_2",
        "firstName": "Michael",
        "lastName": "Chen",
        "graduationYear": 2020,
        "degree": "Business Administration",
        "currentCompany": "McKinsey & Company",
        "currentPosition": "Management Consultant",
        "location": "New York, NY",
        "isPublic": True,
        "skills": ["Strategy", "Analytics", "Project Management", "Leadership"],
        "interests": ["Business Strategy", "Technology", "Travel"],
        "createdAt": "2023-02-20T00:00:00+00:00",
        "updatedAt": "2024-01-05T00:00:00+00:00",
    },
    {
        "id": "3",
        "userId": "user_3",
        "firstName": "Emily",
        "lastName": "Rodriguez",
        "graduationYear": 2019,
        "degree": "Marketing",
        "currentCompany": "HubSpot",
        "currentPosition": "Product Marketing Manager",
        "location": "Boston, MA",
        "isPublic": True,
        "skills": ["Product Marketing", "SEO", "Analytics"],
        "interests": ["SaaS", "Growth", "Writing"],
        "createdAt": "2023-03-02T00:00:00+00:00",
        "updatedAt": "2023-12-18T00:00:00+00:00",
    },
    {
        "id": "4",
        "userId": "user_4",
        "firstName": "David",
        "lastName": "Okafor",
        "graduationYear": 2015,
        "degree": "Mechanical Engineering",
        "currentCompany": "Tesla",
        "currentPosition": "Engineering Manager",
        "location": "Austin, TX",
        "isPublic": False,
        "skills": ["CAD", "Manufacturing", "Leadership", "Python"],
        "interests": ["Electric Vehicles", "Robotics"],
        "createdAt": "2023-04-11T00:00:00+00:00",
        "updatedAt": "2024-02-01T00:00:00+00:00",
    },
    {
        "id": "5",
        "userId": "user_5",
        "firstName": "Priya",
        "lastName": "Natarajan",
        "graduationYear": 2018,
        "degree": "Computer Science",
        "currentCompany": "Stripe",
        "currentPosition": "Staff Engineer",
        "location": "Seattle, WA",
        "isPublic": True,
        "skills": ["Go", "Distributed Systems", "Python"],
        "interests": ["Payments", "Mentoring"],
        "createdAt": "2023-05-06T00:00:00+00:00",
        "updatedAt": "2024-01-22T00:00:00+00:00",
    },
]

EVENTS = [
    {
        "id": "1",
        "title": "Annual Alumni Gala 2024",
        "description": "An evening celebrating alumni achievements, with keynote speakers and dinner.",
        "eventDate": "2024-06-15T18:00:00+00:00",
        "location": "Grand Ballroom, Marriott Downtown",
        "capacity": 200,
        "status": "published",
        "eventType": "paid",
        "ticketPrice": 75,
        "createdBy": "admin_1",
        "registrations": [],
        "createdAt": "2024-01-15T00:00:00+00:00",
        "updatedAt": "2024-01-20T00:00:00+00:00",
    },
    {
        "id": "2",
        "title": "Tech Career Panel Discussion",
        "description": "Alumni from top tech companies discuss career paths and interview tips.",
        "eventDate": "2024-03-20T19:00:00+00:00",
        "location": "Virtual Event (Zoom)",
        "capacity": 100,
        "status": "completed",
        "eventType": "free",
        "createdBy": "admin_1",
        "registrations": [],
        "createdAt": "2024-02-01T00:00:00+00:00",
        "updatedAt": "2024-03-21T00:00:00+00:00",
    },
    {
        "id": "3",
        "title": "Alumni Startup Showcase",
        "description": "Pitch presentations from alumni-founded startups, plus investor meetups.",
        "eventDate": "2024-04-10T17:30:00+00:00",
        "location": "Innovation Hub, Campus Center",
        "capacity": 2,
        "status": "published",
        "eventType": "free",
        "createdBy": "admin_1",
        "registrations": [],
        "createdAt": "2024-02-10T00:00:00+00:00",
        "updatedAt": "2024-02-10T00:00:00+00:00",
    },
]

CAMPAIGNS = [
    {"id": "campaign_1", "name": "General Fund 2024", "goal": 50000, "raised": 750},
    {"id": "campaign_2", "name": "Scholarship Fund", "goal": 100000, "raised": 1000},
]

DONATIONS = [
    {
        "id": "1",
        "donorId": "1",
        "amount": 500,
        "donationDate": "2024-01-15T00:00:00+00:00",
        "purpose": "General Fund",
        "campaignId": "campaign_1",
        "paymentMethod": "Credit Card",
        "status": "completed",
    },
    {
        "id": "2",
        "donorId": "2",
        "amount": 1000,
        "donationDate": "2024-01-20T00:00:00+00:00",
        "purpose": "Scholarship Fund",
        "campaignId": "campaign_2",
        "paymentMethod": "Bank Transfer",
        "status": "completed",
    },
    {
        "id": "3",
        "donorId": "3",
        "amount": 250,
        "donationDate": "2024-02-01T00:00:00+00:00",
        "purpose": "Alumni Events",
        "campaignId": "campaign_1",
        "paymentMethod": "PayPal",
        "status": "completed",
    },
]
