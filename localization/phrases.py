"""
Pre-authored UI phrases keyed by namespaced translation key.

English is the reference table; every key should exist there. Other tables
may be partial and fall back to English at lookup time.
"""

from typing import Dict

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        # Landing
        "landing.welcome": "Welcome to UrbanPulse",
        "landing.tagline": "Your smart city companion",
        "landing.getStarted": "Get Started",
        "landing.haveAccount": "I already have an account",
        # Dashboard
        "dashboard.yourArea": "Your Area",
        "dashboard.emergencySos": "Emergency SOS",
        "dashboard.todaysServices": "Today's Services",
        "dashboard.viewAll": "View All",
        "dashboard.recentAlerts": "Recent Alerts",
        "dashboard.garbageCollection": "Garbage Collection",
        "dashboard.waterSupply": "Water Supply",
        "dashboard.powerUpdates": "Power Updates",
        "dashboard.healthServices": "Health Services",
        "dashboard.onSchedule": "On Schedule",
        "dashboard.normal": "Normal",
        "dashboard.reportIssue": "Report an Issue",
        "dashboard.myComplaints": "My Complaints",
        # Profile
        "profile.title": "Profile & Settings",
        "profile.language": "Language",
        "profile.notifications": "Notifications",
        "profile.logOut": "Log Out",
        "profile.logOutConfirm": "Are you sure you want to log out?",
        # Emergency
        "emergency.title": "Emergency Services",
        "emergency.selectService": "Select an emergency service to call",
        "emergency.ambulance": "Ambulance",
        "emergency.police": "Police",
        "emergency.fire": "Fire",
        "emergency.callConfirm": "Call {service}?",
        "emergency.callMessage": "Are you sure you want to call {number}?",
        # Language selection
        "language.title": "Choose App Language",
        "language.updating": "Updating language...",
        # Free-text translation
        "translation.title": "Translate Text",
        "translation.inputPlaceholder": "Type or paste text to translate",
        "translation.translate": "Translate",
        "translation.detected": "Detected language: {language}",
        "translation.clearCache": "Clear Translation Cache",
        # Debug console
        "console.title": "Debug Console",
        "console.clear": "Clear Logs",
        "console.empty": "No logs yet",
        # Common
        "common.loading": "Loading...",
        "common.error": "Error",
        "common.success": "Success",
        "common.save": "Save",
        "common.cancel": "Cancel",
        "common.continue": "Continue",
        "common.back": "Back",
        "common.done": "Done",
    },
    "hi": {
        "landing.welcome": "UrbanPulse में आपका स्वागत है",
        "landing.tagline": "आपका स्मार्ट सिटी साथी",
        "landing.getStarted": "शुरू करें",
        "landing.haveAccount": "मेरा पहले से खाता है",
        "dashboard.yourArea": "आपका क्षेत्र",
        "dashboard.emergencySos": "आपातकालीन SOS",
        "dashboard.todaysServices": "आज की सेवाएं",
        "dashboard.viewAll": "सभी देखें",
        "dashboard.recentAlerts": "हाल की सूचनाएं",
        "dashboard.garbageCollection": "कचरा संग्रह",
        "dashboard.waterSupply": "जल आपूर्ति",
        "dashboard.powerUpdates": "बिजली अपडेट",
        "dashboard.healthServices": "स्वास्थ्य सेवाएं",
        "dashboard.onSchedule": "समय पर",
        "dashboard.normal": "सामान्य",
        "dashboard.reportIssue": "समस्या रिपोर्ट करें",
        "dashboard.myComplaints": "मेरी शिकायतें",
        "profile.title": "प्रोफ़ाइल और सेटिंग्स",
        "profile.language": "भाषा",
        "profile.notifications": "सूचनाएं",
        "profile.logOut": "लॉग आउट",
        "profile.logOutConfirm": "क्या आप वाकई लॉग आउट करना चाहते हैं?",
        "emergency.title": "आपातकालीन सेवाएं",
        "emergency.selectService": "कॉल करने के लिए आपातकालीन सेवा चुनें",
        "emergency.ambulance": "एम्बुलेंस",
        "emergency.police": "पुलिस",
        "emergency.fire": "अग्निशामक",
        "emergency.callConfirm": "{service} कॉल करें?",
        "emergency.callMessage": "क्या आप {number} पर कॉल करना चाहते हैं?",
        "language.title": "ऐप भाषा चुनें",
        "language.updating": "भाषा अपडेट हो रही है...",
        "translation.title": "टेक्स्ट का अनुवाद करें",
        "translation.translate": "अनुवाद करें",
        "common.loading": "लोड हो रहा है...",
        "common.error": "त्रुटि",
        "common.success": "सफल",
        "common.save": "सहेजें",
        "common.cancel": "रद्द करें",
        "common.continue": "जारी रखें",
        "common.back": "वापस",
        "common.done": "पूर्ण",
    },
    "te": {
        "landing.welcome": "UrbanPulseకు స్వాగతం",
        "landing.tagline": "మీ స్మార్ట్ సిటీ కంపానియన్",
        "landing.getStarted": "ప్రారంభించండి",
        "landing.haveAccount": "నాకు ఇప్పటికే ఖాతా ఉంది",
        "dashboard.yourArea": "మీ ప్రాంతం",
        "dashboard.emergencySos": "అత్యవసర SOS",
        "dashboard.todaysServices": "నేటి సేవలు",
        "dashboard.viewAll": "అన్నీ వీక్షించండి",
        "dashboard.recentAlerts": "ఇటీవలి హెచ్చరికలు",
        "dashboard.garbageCollection": "చెత్త సేకరణ",
        "dashboard.waterSupply": "నీటి సరఫరా",
        "dashboard.powerUpdates": "విద్యుత్ నవీకరణలు",
        "dashboard.healthServices": "ఆరోగ్య సేవలు",
        "dashboard.onSchedule": "షెడ్యూల్ ప్రకారం",
        "dashboard.normal": "సాధారణ",
        "dashboard.reportIssue": "సమస్యను నివేదించండి",
        "dashboard.myComplaints": "నా ఫిర్యాదులు",
        "profile.title": "ప్రొఫైల్ మరియు సెట్టింగ్‌లు",
        "profile.language": "భాష",
        "profile.notifications": "నోటిఫికేషన్‌లు",
        "profile.logOut": "లాగ్ అవుట్",
        "profile.logOutConfirm": "మీరు నిజంగా లాగ్ అవుట్ చేయాలనుకుంటున్నారా?",
        "emergency.title": "అత్యవసర సేవలు",
        "emergency.selectService": "కాల్ చేయడానికి అత్యవసర సేవను ఎంచుకోండి",
        "emergency.ambulance": "అంబులెన్స్",
        "emergency.police": "పోలీసు",
        "emergency.fire": "అగ్నిమాపక",
        "emergency.callConfirm": "{service} కాల్ చేయాలా?",
        "emergency.callMessage": "మీరు {number} కాల్ చేయాలనుకుంటున్నారా?",
        "language.title": "అనువర్తన భాషను ఎంచుకోండి",
        "language.updating": "భాష నవీకరించబడుతోంది...",
        "common.loading": "లోడ్ అవుతోంది...",
        "common.error": "దోషం",
        "common.success": "విజయం",
        "common.save": "సేవ్ చేయండి",
        "common.cancel": "రద్దు చేయండి",
        "common.continue": "కొనసాగించండి",
        "common.back": "వెనక్కి",
        "common.done": "పూర్తి",
    },
}
