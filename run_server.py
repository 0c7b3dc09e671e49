"""
Start a local development server for the CareerPath backend.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting CareerPath Backend")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:     GET  http://localhost:8000/health")
    print("   - Generate:         POST http://localhost:8000/generate-career-recommendations")
    print("   - Profile:          GET/POST/PUT/DELETE http://localhost:8000/profile")
    print("   - Recommendations:  GET  http://localhost:8000/recommendations")
    print("   - Regenerate:       POST http://localhost:8000/recommendations/regenerate")
    print("   - API Docs:              http://localhost:8000/docs")
    print()
    print("🔐 Authentication:")
    print("   /profile and /recommendations require:")
    print("   Authorization: Bearer <supabase access token>")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/generate-career-recommendations" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"profile": {"id": "<uuid>", "branch": "computer", "current_year": 2},')
    print('          "skills": [{"skill_name": "Python", "skill_level": "intermediate"}],')
    print('          "interests": [{"interest": "AI"}]}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "careerpath.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
