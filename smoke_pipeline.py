"""Quick end-to-end check of a running tutorial server (needs GEMINI_API_KEY on the server)."""
import glob
import os
import sys

import httpx

BASE = os.getenv("TUTORIAL_BASE_URL", "http://localhost:3001")

# 1. Health
r = httpx.get(f"{BASE}/api/health")
print(f"HEALTH: {r.status_code} {r.text}")
if r.status_code != 200:
    sys.exit(1)

# Find a test image from uploads
imgs = glob.glob("uploads/*")
if not imgs:
    print("No test images found in uploads/")
    sys.exit(1)

test_img = imgs[0]
print(f"Using test image: {test_img}")

# 2. Generate tutorial
with open(test_img, "rb") as f:
    ext = os.path.splitext(test_img)[1]
    mime = {"png": "image/png", "jpg": "image/jpeg", "jpeg": "image/jpeg", "webp": "image/webp"}.get(ext.lstrip("."), "image/jpeg")
    r2 = httpx.post(
        f"{BASE}/api/generate-tutorial",
        files={"image": (f"test{ext}", f, mime)},
        data={"difficulty": "beginner"},
        timeout=600,
    )

print(f"GENERATE: {r2.status_code}")
if r2.status_code != 200:
    print(f"  Error: {r2.text}")
    sys.exit(1)

g = r2.json()
print(f"  Sketch: {g['sketch']['imageUrl']}")
print(f"  Description: {g['sketch']['description'][:80]}...")
print(f"  Total steps: {len(g['steps'])}")

for s in g["steps"]:
    print(f"  Step {s['step']}: {s['description']}")
    print(f"    Image URL: {s['imageUrl']}")

# 3. Check generated images are served
missing = 0
for url in [g["sketch"]["imageUrl"]] + [s["imageUrl"] for s in g["steps"] if s["imageUrl"]]:
    ok = httpx.get(f"{BASE}{url}").status_code == 200
    missing += not ok
    print(f"  {'OK' if ok else 'MISSING'}: {url}")

print("\nDONE - All checks passed!" if not missing and g["steps"] else "\nFAILED - Missing images or no steps")
