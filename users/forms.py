from django import forms
from django.contrib.auth.forms import AuthenticationForm, UserCreationForm

from home.zones import district_choices, is_valid_location, province_choices, zone_choices
from .models import MyUser, TeacherProfile


class MyUserCreationForm(UserCreationForm):
    email = forms.EmailField(
        label="Email",
        widget=forms.EmailInput(attrs={'class': 'form-control'}),
    )
    nic_number = forms.CharField(
        label="NIC number",
        max_length=12,
        help_text="Used only to prevent duplicate registrations. Never shown to other teachers.",
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    phone_number = forms.CharField(
        label="Phone number",
        max_length=20,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )

    class Meta:
        model = MyUser
        fields = ('email', 'nic_number', 'phone_number')

    def clean_nic_number(self):
        nic_number = self.cleaned_data['nic_number'].strip()
        if MyUser.objects.filter(nic_number=nic_number).exists():
            raise forms.ValidationError("An account with this NIC number already exists.")
        return nic_number


class MyAuthenticationForm(AuthenticationForm):
    username = forms.EmailField(
        label="Email",
        widget=forms.EmailInput(attrs={'class': 'form-control', 'autofocus': True}),
    )
    password = forms.CharField(
        label="Password",
        strip=False,
        widget=forms.PasswordInput(attrs={'class': 'form-control'}),
    )


class TeacherProfileForm(forms.ModelForm):
    """
    Profile editor. District and zone options depend on the selected province
    and district, so their choices are rebuilt from the submitted data (or the
    saved profile) on every request.
    """
    current_province = forms.ChoiceField(label="Current province")
    current_district = forms.ChoiceField(label="Current district")
    current_zone = forms.ChoiceField(label="Current zone")
    desired_province = forms.ChoiceField(label="Desired province")
    desired_district = forms.ChoiceField(label="Desired district")
    desired_zones = forms.MultipleChoiceField(
        label="Desired zones",
        widget=forms.CheckboxSelectMultiple,
        help_text="Select every zone you would accept in the desired district.",
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        blank = [('', '---------')]

        self.fields['current_province'].choices = blank + province_choices()
        self.fields['desired_province'].choices = blank + province_choices()

        current_province = self._selected('current_province')
        current_district = self._selected('current_district')
        desired_province = self._selected('desired_province')
        desired_district = self._selected('desired_district')

        self.fields['current_district'].choices = blank + district_choices(current_province)
        self.fields['current_zone'].choices = blank + zone_choices(current_province, current_district)
        self.fields['desired_district'].choices = blank + district_choices(desired_province)
        self.fields['desired_zones'].choices = zone_choices(desired_province, desired_district)

        for name in ('full_name', 'subject', 'grade_taught', 'current_school', 'whatsapp_number'):
            self.fields[name].required = True

        if self.instance.pk and not self.instance.desired_zones and self.instance.desired_zone:
            # Old single-zone profile: preselect that zone
            self.initial['desired_zones'] = [self.instance.desired_zone]

        for name, field in self.fields.items():
            if name in ('desired_zones', 'hide_contact'):
                continue
            field.widget.attrs.setdefault('class', 'form-select' if isinstance(field, forms.ChoiceField) else 'form-control')

    def _selected(self, name):
        if name in self.data:
            return self.data.get(name)
        return getattr(self.instance, name, '') if self.instance.pk else self.initial.get(name, '')

    class Meta:
        model = TeacherProfile
        fields = [
            'full_name', 'subject', 'medium_of_instruction', 'grade_taught', 'school_type',
            'current_province', 'current_district', 'current_zone', 'current_school',
            'desired_province', 'desired_district', 'desired_zones',
            'whatsapp_number', 'hide_contact',
        ]
        widgets = {
            'hide_contact': forms.CheckboxInput(attrs={'class': 'form-check-input'}),
        }

    def clean(self):
        cleaned_data = super().clean()

        current = (
            cleaned_data.get('current_province'),
            cleaned_data.get('current_district'),
            cleaned_data.get('current_zone'),
        )
        if all(current) and not is_valid_location(*current):
            raise forms.ValidationError("Your current province, district and zone do not belong together.")

        desired_province = cleaned_data.get('desired_province')
        desired_district = cleaned_data.get('desired_district')
        if desired_province and desired_district and not is_valid_location(desired_province, desired_district):
            raise forms.ValidationError("Your desired district is not in the desired province.")

        # Keep the order the teacher picked, without repeats
        zones = []
        for zone in cleaned_data.get('desired_zones') or []:
            if zone not in zones:
                zones.append(zone)
        cleaned_data['desired_zones'] = zones
        return cleaned_data

    def save(self, commit=True):
        profile = super().save(commit=False)
        # Single-zone readers see the first choice
        profile.desired_zone = profile.desired_zones[0] if profile.desired_zones else ''
        profile.profile_completed = True
        if commit:
            profile.save()
        return profile
